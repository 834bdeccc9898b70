# rovodoc

rovodoc reads the doc comments of HTTP handler functions and turns them into
OpenAPI operation objects. You describe a handler in plain Markdown sections.
rovodoc checks that text, reports mistakes with helpful messages and gives
back a structured description of the operation.

## Installation

```
pip install rovodoc
```

The package has no runtime dependencies. To run the tests, install the `test`
extra: `pip install rovodoc[test]`.

## The doc-comment format

A handler's doc comment starts with a one-line title. A free-form description
may follow. After that come up to three sections:

```
/// Get user by ID
///
/// Looks a user up by their numeric identifier.
///
/// # Responses
///
/// 200: Json<User> - User found successfully
/// 404: () - User not found
///
/// # Examples
///
/// 200: User { id: 1, name: "Alice".into() }
///
/// # Metadata
///
/// @tag users
/// @security bearer_auth
/// @id getUserById
#[rovo]
async fn get_user(Path(id): Path<u32>) -> impl IntoApiResponse { ... }
```

- `# Responses`: one line per status code, in the form
  `<status>: <type> - <description>`. A description can continue on the
  lines that follow. Status codes must lie between 100 and 599.
- `# Examples`: `<status>: <expression>`. An expression may run over
  several lines while its brackets stay open, or it may be fenced in a
  ```` ``` ```` block (```` ```rust ```` and ```` ```rs ```` are accepted too).
  Every example's status code must also appear under `# Responses`, provided
  that section is present.
- `# Metadata`: `@tag <name>` and `@security <scheme>` may each appear more
  than once. `@id <operation_id>` takes letters, digits and underscores only;
  without it the function name is used. `@hidden` marks the handler as
  hidden.
- Sections with any other heading are ignored.
- A line that reads `@rovo-ignore` stops processing at that point.
- A `#[deprecated]` attribute before the function marks the operation as
  deprecated.

Doc text is taken from `///` comment lines and from `#[doc = "..."]`
attributes that appear before the `fn` keyword.

Mistakes raise `rovodoc.errors.ParseError`. Its `message` explains the
problem, and its `span` holds the line number where one is known. For an
unknown annotation the message suggests the nearest valid one
(`@tga` gives `did you mean '@tag'?`).

## Reading a handler

```python
from rovodoc.operation import rovo

source = '''
/// Get user by ID
///
/// # Responses
///
/// 200: Json<User> - User found successfully
/// 404: () - User not found
///
/// # Metadata
///
/// @tag users
#[rovo]
async fn get_user(State(app): State<AppState>, Path(id): Path<u32>) -> impl IntoApiResponse {}
'''

handler = rovo(source)
handler.operation()
# {'operationId': 'get_user', 'summary': 'Get user by ID', 'description': '',
#  'tags': ['users'],
#  'responses': {'200': {'description': 'User found successfully',
#                        'x-response-type': 'Json<User>'},
#                '404': {'description': 'User not found',
#                        'x-response-type': '()'}}}
```

`rovo(source)` returns a `DocumentedHandler`. It has these members:

- `operation()`: the operation as a dict. It has `operationId`, `summary` and
  `description`. It also has `tags`, `deprecated` and `security`
  (`[{scheme: []}, ...]`) when these are set. Its `responses` are keyed by
  status code. Each response carries its `description` and its type as
  `x-response-type`, and the example expression as `x-example-code` when the
  status code has one.
- `into_route(method)`: a one-entry table `{METHOD: handler}` for `GET`,
  `POST`, `PATCH`, `DELETE` or `PUT`. Any other method raises `ValueError`.
- `name`, `operation_id`, `hidden`, `state_type`: the function name, the
  operation ID, and the hidden flag. `state_type` is the type inside the first
  `State<...>`, or `()` when there is none.
- `impl_name`, `const_name`, `implementation`: `__<name>_impl`, the name in
  upper case, and the function source made public and renamed to `impl_name`.

## Lower-level pieces

- `rovodoc.parser.parse_rovo_function(source)` returns a
  `(FuncItem, DocInfo)` pair. `rovodoc.parser.parse_doc_comments(lines)`
  parses a list of `rovodoc.model.DocLine` objects directly.
- `rovodoc.model` holds the dataclasses `DocInfo`, `ResponseInfo`,
  `ExampleInfo`, `DocLine` and `FuncItem`. It also provides
  `FuncItem.with_renamed(new_name)`.
- `rovodoc.annotations` parses the single entries: `parse_tag`,
  `parse_security`, `parse_id`, `parse_response_from_parts`,
  `parse_example_from_parts` and `validate_status_code`.
- `rovodoc.tokens` provides a small lexer for code fragments: `tokenize`,
  `Token` and `TokenKind`. It also has `validate_expression`, which checks for
  balanced delimiters and a complete expression, along with
  `extract_state_type` and `extract_doc_text`.
- `rovodoc.similarity` provides `levenshtein_distance` and
  `find_closest_annotation`.

## What rovodoc does not do

rovodoc reads and checks documentation, and nothing more:

- It has no router and no HTTP server.
- It does not assemble a full OpenAPI document from several handlers.
- It does not serve a specification as JSON or YAML.
- It does not provide Swagger, Redoc or Scalar pages.

`hidden` is only recorded. `operation()` still returns the operation, and the
caller decides whether to leave it out.

Example expressions are checked only for being well formed. Their types and
fields are not checked.