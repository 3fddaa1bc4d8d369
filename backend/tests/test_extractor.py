import inspect
from dataclasses import dataclass

from tenantdb.routing import KeyExtractor, normalize_key
from tenantdb.schemas import ExhibitionLocationKey

extract = KeyExtractor()


@dataclass
class Payload:
    country_code: str | None
    name: str = "x"


def call(func, *args, **kwargs):
    return extract(inspect.signature(func), args, kwargs)


def test_normalize_key():
    assert normalize_key(" es ") == "ES"
    assert normalize_key("") is None
    assert normalize_key("   ") is None
    assert normalize_key(None) is None
    assert normalize_key(49) is None


def test_record_field_is_used_and_upper_cased():
    def op(location, db):
        pass

    key = ExhibitionLocationKey(
        country_code="es",
        company_code=1,
        dealer_code=2,
        chassis="VIN1",
        sequence=1,
        location_code="A",
    )
    assert call(op, key, object()) == "ES"


def test_mapping_payload_is_a_record():
    def op(payload):
        pass

    assert call(op, {"country_code": "gb", "other": 1}) == "GB"


def test_named_str_parameter_is_case_insensitive():
    def op(Country_Code, user_id):
        pass

    assert call(op, "de", 7) == "DE"


def test_keyword_argument_is_found():
    def op(user_id, country_code=None):
        pass

    assert call(op, 7, country_code="es") == "ES"


def test_record_takes_precedence_over_parameter():
    def op(country_code, payload):
        pass

    assert call(op, "DE", Payload(country_code="es")) == "ES"


def test_blank_record_field_falls_through_to_parameter():
    def op(country_code, payload):
        pass

    assert call(op, "gb", Payload(country_code="  ")) == "GB"


def test_non_string_parameter_is_ignored():
    def op(country_code):
        pass

    assert call(op, 49) is None


def test_unrelated_arguments_give_no_key():
    def op(name, amount):
        pass

    assert call(op, "DE", 3) is None


def test_var_keyword_arguments_are_searched():
    def op(**options):
        pass

    assert call(op, country_code="de") == "DE"


def test_custom_field_and_parameter_names():
    extractor = KeyExtractor(field="branch", param="branch")

    def op(branch):
        pass

    assert extractor(inspect.signature(op), ("fr",), {}) == "FR"
    assert extractor(None, ({"branch": "it"},), {}) == "IT"


def test_without_signature_only_keywords_are_named():
    assert extract(None, ("DE",), {}) is None
    assert extract(None, (), {"country_code": "de"}) == "DE"
