"""Tests for the HTML+ERB parser."""

from __future__ import annotations

from wren.exceptions import ErrorCode
from wren.nodes import (
    Attribute,
    Doctype,
    Element,
    HTMLComment,
    ScriptComment,
    ScriptControlFlow,
    ScriptExecution,
    ScriptOutput,
    Text,
)
from wren.parser import parse


def _elements(nodes):
    return [node for node in nodes if isinstance(node, Element)]


class TestElements:
    """Element structure, void elements and close tags."""

    def test_nested_elements(self) -> None:
        """Children are nested under their parent element."""
        document = parse("<div><p>Hello</p></div>")
        assert not document.errors
        (div,) = document.children
        assert div.tag_name == "div"
        (p,) = div.children
        assert p.tag_name == "p"
        assert p.children == (Text(location=p.children[0].location, content="Hello"),)

    def test_whitespace_is_kept_as_text(self) -> None:
        """Inter-element whitespace is retained as Text nodes."""
        document = parse("<ul>\n  <li>a</li>\n\n  <li>b</li>\n</ul>")
        (ul,) = document.children
        texts = [child.content for child in ul.children if isinstance(child, Text)]
        assert texts == ["\n  ", "\n\n  ", "\n"]

    def test_void_element_has_no_close_tag(self) -> None:
        """Void elements never consume children."""
        document = parse("<p><br>text</p>")
        (p,) = document.children
        br, text = p.children
        assert br.is_void
        assert not br.has_close_tag
        assert text.content == "text"

    def test_self_closing_element(self) -> None:
        """A trailing slash marks the element as self-closing."""
        (element,) = parse('<my-widget data-id="1" />').children
        assert element.self_closing
        assert element.children == ()

    def test_source_is_kept_on_document(self) -> None:
        source = "<p>x</p>\n"
        assert parse(source).source == source

    def test_locations(self) -> None:
        """Locations carry 1-based lines and 0-based columns."""
        document = parse("<div>\n  <p>x</p>\n</div>")
        (div,) = document.children
        (p,) = _elements(div.children)
        assert p.location.start.line == 2
        assert p.location.start.column == 2
        assert div.location.is_multiline
        assert not p.location.is_multiline


class TestRawText:
    """Content-preserving elements keep their body as one Text node."""

    def test_pre_body_is_single_text(self) -> None:
        (pre,) = parse("<pre>  a <b>\n   b</pre>").children
        assert len(pre.children) == 1
        assert pre.children[0].content == "  a <b>\n   b"

    def test_script_body_ignores_markup(self) -> None:
        (script,) = parse("<script>if (a < b) { x = '</div>'; }</script>").children
        assert script.children[0].content == "if (a < b) { x = '</div>'; }"

    def test_close_tag_is_case_insensitive(self) -> None:
        document = parse("<style>a{}</STYLE>")
        assert not document.errors
        (style,) = document.children
        assert style.children[0].content == "a{}"


class TestAttributes:
    """Attribute values, quoting and boolean attributes."""

    def test_quoted_values(self) -> None:
        (div,) = parse("<div class='a' id=\"b\" hidden></div>").children
        cls, id_, hidden = div.attributes
        assert cls.quote == "'"
        assert cls.value[0].content == "a"
        assert id_.quote == '"'
        assert hidden.value is None

    def test_unquoted_value(self) -> None:
        (div,) = parse("<div id=main></div>").children
        (attribute,) = div.attributes
        assert attribute.quote == ""
        assert attribute.value[0].content == "main"

    def test_script_inside_value(self) -> None:
        """Output tags inside values become value parts."""
        (a,) = parse('<a href="/users/<%= user.id %>">x</a>').children
        (href,) = a.attributes
        text, output = href.value
        assert text.content == "/users/"
        assert isinstance(output, ScriptOutput)
        assert output.content == " user.id "

    def test_conditional_inside_value(self) -> None:
        (div,) = parse('<div class="a <% if b %>c<% end %>"></div>').children
        (cls,) = div.attributes
        flow = cls.value[1]
        assert isinstance(flow, ScriptControlFlow)
        assert flow.kind == "if"
        assert flow.body[0].content == "c"
        assert flow.end is not None

    def test_conditional_attribute_block(self) -> None:
        """Control flow between attributes gates whole attributes."""
        source = '<input <% if checked %>checked<% else %>value="no"<% end %>>'
        (element,) = parse(source).children
        (flow,) = element.attributes
        assert isinstance(flow, ScriptControlFlow)
        assert isinstance(flow.body[0], Attribute)
        assert flow.body[0].name == "checked"
        (branch,) = flow.branches
        assert branch.kind == "else"
        assert branch.body[0].name == "value"

    def test_script_tag_in_open_tag(self) -> None:
        (div,) = parse('<div <%= data_attributes %> id="x"></div>').children
        output, attribute = div.attributes
        assert isinstance(output, ScriptOutput)
        assert attribute.name == "id"


class TestScriptTags:
    """Classification of script tags and control flow."""

    def test_script_kinds(self) -> None:
        document = parse("<%= a %><% b = 1 %><%# note %>")
        output, execution, comment = document.children
        assert isinstance(output, ScriptOutput)
        assert isinstance(execution, ScriptExecution)
        assert isinstance(comment, ScriptComment)
        assert comment.open_delim == "<%#"

    def test_if_elsif_else(self) -> None:
        source = "<% if a %>A<% elsif b %>B<% else %>C<% end %>"
        (flow,) = parse(source).children
        assert flow.kind == "if"
        assert [branch.kind for branch in flow.branches] == ["elsif", "else"]
        assert flow.branches[1].body[0].content == "C"

    def test_case_in_is_distinguished(self) -> None:
        (flow,) = parse("<% case x %><% in Integer %>n<% end %>").children
        assert flow.kind == "case_in"
        (flow,) = parse("<% case x %><% when 1 %>n<% end %>").children
        assert flow.kind == "case"

    def test_output_block(self) -> None:
        """Output tags ending in ``do |f|`` open a block."""
        (flow,) = parse("<%= form_with model: @user do |f| %>x<% end %>").children
        assert isinstance(flow, ScriptControlFlow)
        assert flow.kind == "block"
        assert flow.open_delim == "<%="

    def test_one_line_if_is_plain(self) -> None:
        (node,) = parse("<% if a then b end %>").children
        assert isinstance(node, ScriptExecution)

    def test_trim_delimiters(self) -> None:
        (node,) = parse("<%- x -%>").children
        assert node.open_delim == "<%-"
        assert node.close_delim == "-%>"


class TestOtherNodes:
    def test_comment_and_doctype(self) -> None:
        doctype, comment = parse("<!DOCTYPE html><!-- hi -->").children
        assert isinstance(doctype, Doctype)
        assert doctype.value == "<!DOCTYPE html>"
        assert isinstance(comment, HTMLComment)
        assert comment.content == " hi "

    def test_lone_angle_bracket_is_text(self) -> None:
        document = parse("a < b and c > d")
        assert not document.errors
        assert "".join(node.content for node in document.children) == "a < b and c > d"


class TestErrors:
    """Malformed input is recorded on the document, never raised."""

    def _codes(self, source: str) -> list[ErrorCode]:
        return [error.code for error in parse(source).errors]

    def test_unclosed_script_tag(self) -> None:
        assert self._codes("<p><%= x </p>") == [ErrorCode.UNCLOSED_SCRIPT_TAG, ErrorCode.MISSING_CLOSE_TAG]

    def test_unclosed_comment(self) -> None:
        assert self._codes("<!-- never") == [ErrorCode.UNCLOSED_COMMENT]

    def test_missing_close_tag(self) -> None:
        assert self._codes("<div><p>x</div>") == [ErrorCode.MISSING_CLOSE_TAG]

    def test_stray_close_tag(self) -> None:
        document = parse("x</span>y")
        assert [error.code for error in document.errors] == [ErrorCode.UNEXPECTED_CLOSE_TAG]
        assert "".join(node.content for node in document.children) == "x</span>y"

    def test_unclosed_control_flow(self) -> None:
        assert self._codes("<% if a %>x") == [ErrorCode.UNCLOSED_CONTROL_FLOW]

    def test_stray_end(self) -> None:
        assert self._codes("x<% end %>") == [ErrorCode.UNEXPECTED_SCRIPT_KEYWORD]

    def test_unterminated_attribute(self) -> None:
        codes = self._codes('<div class="a></div>')
        assert codes[0] == ErrorCode.UNTERMINATED_ATTRIBUTE

    def test_error_location(self) -> None:
        (error,) = parse("<div>\n  <p>x\n</div>", filename="show.html.erb").errors
        assert error.lineno == 2
        assert error.col_offset == 2
        assert error.filename == "show.html.erb"
        assert "show.html.erb:2:2" in str(error)
