import logging

import pytest

from vanitygen.config import VanityPath, resolve
from vanitygen.errors import TemplateParseError, TemplateRenderError
from vanitygen.render import render_index, render_project

INDEX_OUT = """
<!DOCTYPE html>
<html>
<body>
<h1>Welcome to go.example.com</h1>
<ul>
<li><a href="https://pkg.go.dev/go.example.com/mycoolproject">go.example.com/mycoolproject</a></li><li><a href="https://pkg.go.dev/go.example.com/myothercoolproject">go.example.com/myothercoolproject</a></li>
</ul>
</body>
</html>
"""

MYCOOLPROJECT_OUT = """
<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="go.example.com/mycoolproject git https://github.com/user/mycoolproject">
<meta name="go-source" content="go.example.com/mycoolproject https://github.com/user/mycoolproject https://github.com/user/mycoolproject/tree/master{/dir} https://github.com/user/mycoolproject/blob/master{/dir}/{file}#L{line}">
</head>
<body>
Nothing to see here folks!
</body>
</html>
"""

MYOTHERCOOLPROJECT_OUT = """
<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="go.example.com/myothercoolproject git https://github.com/user/myothercoolproject">
<meta name="go-source" content="go.example.com/myothercoolproject https://github.com/user/myothercoolproject https://github.com/user/myothercoolproject/tree/master{/dir} https://github.com/user/myothercoolproject/blob/master{/dir}/{file}#L{line}">
</head>
<body>
Nothing to see here folks!
</body>
</html>
"""


def _path(name: str, vcs: str = "git") -> VanityPath:
    return VanityPath(path=name, repo=f"https://github.com/user{name}", display="", vcs=vcs)


def test_generate(vanity_document: str, index_template: str, project_template: str) -> None:
    config = resolve(vanity_document)
    assert len(config.paths) == 2

    index = render_index(config.paths, config.host, index_template)
    assert index.decode("utf-8") == INDEX_OUT

    rendered = render_project(config.paths, config.host, project_template)
    assert len(rendered) == 2

    mcp = rendered["/mycoolproject"]
    assert mcp.content.decode("utf-8") == MYCOOLPROJECT_OUT
    assert mcp.packages == ("pkg/package1", "pkg/package2")

    mocp = rendered["/myothercoolproject"]
    assert mocp.content.decode("utf-8") == MYOTHERCOOLPROJECT_OUT
    assert mocp.packages == ()

    assert rendered.get("/mynonexistantproject") is None
    assert "/mynonexistantproject" not in rendered


def test_index_preserves_input_order() -> None:
    paths = [_path("/zeta"), _path("/alpha"), _path("/mid")]

    index = render_index(paths, "go.example.com", "{% for v in Vanity %}{{ v.Path }};{% endfor %}")

    assert index == b"go.example.com/zeta;go.example.com/alpha;go.example.com/mid;"


def test_project_iterates_in_same_order_as_index() -> None:
    paths = [_path("/zeta"), _path("/alpha")]

    rendered = render_project(paths, "h", "{{ Import }}")

    assert list(rendered) == ["/zeta", "/alpha"]


def test_index_exposes_repo_and_host() -> None:
    index = render_index([_path("/p")], "go.example.com", "{{ Host }}|{% for v in Vanity %}{{ v.Repo }}{% endfor %}")

    assert index == b"go.example.com|https://github.com/user/p"


def test_index_with_no_paths() -> None:
    assert render_index([], "go.example.com", "{{ Host }}{% for v in Vanity %}x{% endfor %}") == b"go.example.com"


def test_index_parse_error() -> None:
    with pytest.raises(TemplateParseError):
        render_index([_path("/p")], "h", "{% for v in Vanity %}")


def test_index_undefined_field_is_an_error() -> None:
    with pytest.raises(TemplateRenderError):
        render_index([_path("/p")], "h", "{% for v in Vanity %}{{ v.Missing }}{% endfor %}")


def test_project_undefined_name_is_an_error() -> None:
    with pytest.raises(TemplateRenderError) as exc:
        render_project([_path("/p")], "h", "{{ Subpath }}")

    assert "/p" in str(exc.value)


def test_project_parse_error_aborts_before_rendering() -> None:
    with pytest.raises(TemplateParseError):
        render_project([_path("/p")], "h", "{{ Import ")


def test_project_first_failure_aborts_the_call(caplog: pytest.LogCaptureFixture) -> None:
    paths = [_path("/first"), _path("/broken", vcs="hg"), _path("/last")]
    template = "{% if VCS == 'hg' %}{{ nope }}{% endif %}{{ Import }}"

    caplog.set_level(logging.DEBUG, logger="vanitygen.render.templates")
    with pytest.raises(TemplateRenderError) as exc:
        render_project(paths, "h", template)

    assert "/broken" in str(exc.value)
    assert "Rendered project page for /first" in caplog.text
    assert "/last" not in caplog.text


def test_project_runtime_error_is_a_render_error() -> None:
    with pytest.raises(TemplateRenderError) as exc:
        render_project([_path("/p")], "h", "{{ 1/0 }}")

    assert isinstance(exc.value.__cause__, ZeroDivisionError)


def test_index_runtime_error_is_a_render_error() -> None:
    with pytest.raises(TemplateRenderError):
        render_index([_path("/p")], "h", "{% for v in Vanity %}{{ v.Repo.no_such_method() }}{% endfor %}")


def test_crlf_line_endings_become_lf() -> None:
    rendered = render_project([_path("/p")], "h", "a\r\n{{ Import }}\r\n")

    assert rendered["/p"].content == b"a\nh/p\n"


def test_project_exposes_every_field() -> None:
    entry = VanityPath(
        path="/svn",
        repo="https://svn.example.com/repo",
        display="a b c",
        vcs="svn",
        packages=("sub",),
    )

    rendered = render_project([entry], "go.example.com", "{{ Import }}|{{ Repo }}|{{ Display }}|{{ VCS }}|{{ Host }}")

    page = rendered["/svn"]
    assert page.content == b"go.example.com/svn|https://svn.example.com/repo|a b c|svn|go.example.com"
    assert page.packages == ("sub",)


def test_project_without_packages_still_renders() -> None:
    rendered = render_project([_path("/solo")], "h", "{{ Import }}")

    assert rendered["/solo"].packages == ()
    assert rendered["/solo"].content == b"h/solo"


def test_values_are_html_escaped() -> None:
    entry = VanityPath(path="/p", repo='https://example.com/"quoted"&x', display="", vcs="git")

    rendered = render_project([entry], "h", '<meta content="{{ Repo }}">')

    assert rendered["/p"].content == b'<meta content="https://example.com/&#34;quoted&#34;&amp;x">'
