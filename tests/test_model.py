from rovodoc.model import DocInfo, DocLine, ExampleInfo, FuncItem, ResponseInfo


def test_doc_info_defaults_are_empty():
    info = DocInfo()
    assert info.title is None
    assert info.description is None
    assert info.responses == [] and info.examples == [] and info.tags == []
    assert info.security_requirements == []
    assert info.operation_id is None
    assert info.deprecated is False and info.hidden is False


def test_doc_info_lists_are_independent():
    a, b = DocInfo(), DocInfo()
    a.tags.append("users")
    assert b.tags == []


def test_records_hold_values():
    resp = ResponseInfo(200, "Json<User>", "Success")
    ex = ExampleInfo(200, "User::default()", 3)
    line = DocLine("text", 4)
    assert (resp.status_code, resp.response_type, resp.description) == (200, "Json<User>", "Success")
    assert ex.span == 3 and ex.example_code == "User::default()"
    assert line.text == "text"


def test_with_renamed_adds_pub_and_renames():
    item = FuncItem("handler", "async fn handler() {}")
    renamed = item.with_renamed("__handler_impl")
    assert renamed == "pub async fn __handler_impl() {}"


def test_with_renamed_keeps_existing_pub():
    item = FuncItem("handler", "pub fn handler(x: u32) -> u32 { x }")
    renamed = item.with_renamed("__handler_impl")
    assert renamed == "pub fn __handler_impl(x: u32) -> u32 { x }"
    assert renamed.count("pub") == 1


def test_with_renamed_skips_attributes():
    source = "#[allow(dead_code)]\nasync fn get_user() { let f = 1; }"
    renamed = FuncItem("get_user", source).with_renamed("__get_user_impl")
    assert renamed.startswith("#[allow(dead_code)]\npub async fn __get_user_impl()")
    assert "get_user()" not in renamed.replace("__get_user_impl", "")


def test_with_renamed_does_not_touch_inner_fn():
    source = "fn outer() { fn inner() {} }"
    renamed = FuncItem("outer", source).with_renamed("__outer_impl")
    assert "fn inner()" in renamed
    assert renamed.startswith("pub fn __outer_impl()")


def test_str_is_source():
    item = FuncItem("h", "fn h() {}")
    assert str(item) == "fn h() {}"