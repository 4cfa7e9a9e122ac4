"""Tests for company details and render options."""

import pytest

from orderdocs.config import ENV_KEYS, CompanyDetails, RenderOptions, load_company_details
from orderdocs.exceptions import ConfigError

DETAILS = {
    "name": "Acme Supply Co",
    "address_line1": "100 Main Street",
    "address_line2": "Fresno, CA 93721",
    "phone": "(559) 555-0100",
    "email": "orders@acme.test",
}


class TestCompanyDetails:
    """Test suite for CompanyDetails loading."""

    def test_from_mapping_defaults(self):
        details = CompanyDetails.from_mapping(DETAILS)
        assert details.name == "Acme Supply Co"
        assert details.website == ""
        assert details.logo is None

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            CompanyDetails.from_mapping({**DETAILS, "fax": "555"})
        assert "fax" in str(exc_info.value)

    @pytest.mark.parametrize("missing", ["name", "email"])
    def test_missing_required_field(self, missing):
        data = {k: v for k, v in DETAILS.items() if k != missing}
        with pytest.raises(ConfigError) as exc_info:
            CompanyDetails.from_mapping(data)
        assert exc_info.value.details == missing

    def test_yaml_round_trip(self, tmp_path):
        details = CompanyDetails.from_mapping({**DETAILS, "website": "www.acme.test", "logo": "logo.png"})
        path = tmp_path / "company.yaml"

        details.to_yaml(path)

        assert "company:" in path.read_text()
        assert CompanyDetails.from_yaml(path) == details

    def test_flat_yaml(self, tmp_path):
        path = tmp_path / "company.yaml"
        path.write_text("\n".join(f'{k}: "{v}"' for k, v in DETAILS.items()))
        assert CompanyDetails.from_yaml(path).phone == "(559) 555-0100"

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "company.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            CompanyDetails.from_yaml(path)

    def test_from_env(self):
        environ = {ENV_KEYS[k]: v for k, v in DETAILS.items()}
        environ["COMPANY24HOURPHONE"] = "(559) 555-0199"

        details = CompanyDetails.from_env(environ)

        assert details.phone_24h == "(559) 555-0199"
        assert details.address_line2 == "Fresno, CA 93721"

    def test_from_env_lists_missing_variables(self):
        environ = {"COMPANYNAME": "Acme Supply Co"}
        with pytest.raises(ConfigError) as exc_info:
            CompanyDetails.from_env(environ)
        assert "COMPANYEMAIL" in exc_info.value.details
        assert "COMPANYNAME" not in exc_info.value.details

    def test_load_company_details(self, tmp_path, monkeypatch):
        path = tmp_path / "company.yaml"
        CompanyDetails.from_mapping(DETAILS).to_yaml(path)
        assert load_company_details(path).email == "orders@acme.test"

        for field_name, env_key in ENV_KEYS.items():
            monkeypatch.delenv(env_key, raising=False)
            if field_name in DETAILS:
                monkeypatch.setenv(env_key, DETAILS[field_name])
        assert load_company_details().name == "Acme Supply Co"


class TestRenderOptions:
    """Test suite for RenderOptions defaults."""

    def test_defaults(self):
        options = RenderOptions()
        assert options.invariant is True
        assert options.line_thickness == 0.8
