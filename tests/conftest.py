from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from vanitygen.config import settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    settings.get_settings.cache_clear()
    yield
    settings.get_settings.cache_clear()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def vanity_document() -> str:
    return textwrap.dedent(
        """
        host: go.example.com
        paths:
          /mycoolproject:
            repo: https://github.com/user/mycoolproject
            packages:
              - pkg/package1
              - pkg/package2

          /myothercoolproject:
            repo: https://github.com/user/myothercoolproject
        """
    )


@pytest.fixture
def index_template() -> str:
    return """
<!DOCTYPE html>
<html>
<body>
<h1>Welcome to {{ Host }}</h1>
<ul>
{% for v in Vanity %}<li><a href="https://pkg.go.dev/{{ v.Path }}">{{ v.Path }}</a></li>{% endfor %}
</ul>
</body>
</html>
"""


@pytest.fixture
def project_template() -> str:
    return """
<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="{{ Import }} {{ VCS }} {{ Repo }}">
<meta name="go-source" content="{{ Import }} {{ Display }}">
</head>
<body>
Nothing to see here folks!
</body>
</html>
"""


@pytest.fixture
def input_dir(tmp_path: Path, vanity_document: str, index_template: str, project_template: str) -> Path:
    """
    Write a complete input directory (vanity.yml + both templates) for tests.
    """
    directory = tmp_path / "input"
    directory.mkdir()
    (directory / "vanity.yml").write_text(vanity_document, encoding="utf-8")
    (directory / "index.tmpl").write_text(index_template, encoding="utf-8")
    (directory / "project.tmpl").write_text(project_template, encoding="utf-8")
    return directory
