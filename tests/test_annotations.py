import pytest

from rovodoc.annotations import (
    parse_example_from_parts,
    parse_id,
    parse_response_from_parts,
    parse_security,
    parse_tag,
    validate_status_code,
)
from rovodoc.errors import ParseError


def test_parses_valid_tag():
    assert parse_tag("@tag users", None) == "users"


def test_tag_requires_value():
    with pytest.raises(ParseError, match="Invalid @tag"):
        parse_tag("@tag", None)


def test_tag_rejects_empty_value():
    with pytest.raises(ParseError, match="Empty"):
        parse_tag("@tag  ", None)


def test_parses_valid_security():
    assert parse_security("@security bearer_auth", None) == "bearer_auth"


def test_security_requires_value():
    with pytest.raises(ParseError, match="Invalid @security"):
        parse_security("@security", None)


def test_parses_valid_id():
    assert parse_id("@id getUserById", None) == "getUserById"


def test_id_allows_underscores():
    assert parse_id("@id get_user_by_id", None) == "get_user_by_id"


def test_id_allows_numbers():
    assert parse_id("@id getUser123", None) == "getUser123"


def test_id_rejects_special_characters():
    with pytest.raises(ParseError, match="Invalid operation ID"):
        parse_id("@id get-user", None)


def test_id_rejects_spaces():
    with pytest.raises(ParseError, match="Invalid operation ID"):
        parse_id("@id get user", None)


@pytest.mark.parametrize("code", [200, 100, 599])
def test_accepts_status_codes_in_range(code):
    assert validate_status_code(code, None) is None


@pytest.mark.parametrize("code", [99, 600])
def test_rejects_status_codes_out_of_range(code):
    with pytest.raises(ParseError, match="out of valid range"):
        validate_status_code(code, None)


def test_status_error_keeps_span():
    with pytest.raises(ParseError) as info:
        validate_status_code(42, "span-1")
    assert info.value.span == "span-1"


def test_response_from_parts_valid():
    info = parse_response_from_parts("Json<User>", 200, "Success", None)
    assert info.status_code == 200
    assert info.description == "Success"
    assert info.response_type == "Json<User>"


def test_response_from_parts_empty_description():
    with pytest.raises(ParseError, match="Missing description"):
        parse_response_from_parts("Json<User>", 200, "", None)


def test_response_from_parts_whitespace_description():
    with pytest.raises(ParseError, match="Missing description"):
        parse_response_from_parts("Json<User>", 200, "   ", None)


def test_response_from_parts_invalid_status():
    with pytest.raises(ParseError, match="out of valid range"):
        parse_response_from_parts("Json<User>", 999, "Success", None)


def test_response_from_parts_unit_type():
    info = parse_response_from_parts("()", 204, "No content", None)
    assert info.response_type == "()"
    assert info.status_code == 204


def test_response_from_parts_unbalanced_type():
    with pytest.raises(ParseError, match="Invalid response type"):
        parse_response_from_parts("(StatusCode, Json<T>", 200, "Broken", None)


def test_example_from_parts_valid():
    info = parse_example_from_parts(200, "User::default()", None)
    assert info.status_code == 200
    assert info.example_code == "User::default()"


def test_example_from_parts_empty_code():
    with pytest.raises(ParseError, match="Empty example expression"):
        parse_example_from_parts(200, "", None)


def test_example_from_parts_whitespace_code():
    with pytest.raises(ParseError, match="Empty example expression"):
        parse_example_from_parts(200, "   ", None)


def test_example_from_parts_invalid_status():
    with pytest.raises(ParseError, match="out of valid range"):
        parse_example_from_parts(999, "User::default()", None)


def test_example_from_parts_invalid_syntax():
    with pytest.raises(ParseError, match="Invalid example expression"):
        parse_example_from_parts(200, "User{", None)


def test_example_from_parts_struct_expression():
    info = parse_example_from_parts(200, 'User { id: 1, name: "Test".into() }', None)
    assert info.example_code == 'User { id: 1, name: "Test".into() }'


def test_example_from_parts_escaped_quotes():
    info = parse_example_from_parts(200, 'User { name: \\"Test\\".into() }', None)
    assert info.example_code == 'User { name: "Test".into() }'


def test_example_from_parts_vec_expression():
    info = parse_example_from_parts(200, "vec![1, 2, 3]", None)
    assert info.example_code == "vec![1, 2, 3]"


def test_example_from_parts_method_chain():
    info = parse_example_from_parts(200, "User::new().with_id(1)", "sp")
    assert info.example_code == "User::new().with_id(1)"
    assert info.span == "sp"


def test_example_trailing_operator_reports_parse_error():
    with pytest.raises(ParseError, match="parse error"):
        parse_example_from_parts(200, "1 +", None)


def test_tag_with_extra_spaces():
    assert parse_tag("@tag   users", None) == "users"


def test_security_with_extra_spaces():
    assert parse_security("@security   bearer", None) == "bearer"


def test_id_requires_value():
    with pytest.raises(ParseError, match="Invalid @id"):
        parse_id("@id", None)


def test_id_rejects_empty_value():
    with pytest.raises(ParseError, match="Empty"):
        parse_id("@id  ", None)


def test_security_rejects_empty_value():
    with pytest.raises(ParseError, match="Empty"):
        parse_security("@security  ", None)