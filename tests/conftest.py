import pytest
from pathlib import Path

from adapters.html_parser import BeautifulSoupParser
from domain.nodes import Document, Element, Text


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir(project_root: Path) -> Path:
    """Return the fixtures directory path."""
    return project_root / "tests" / "fixtures"


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML content for unit tests."""
    return "<html><body><div id='hello'>Hello World!</div></body></html>"


@pytest.fixture
def parser() -> BeautifulSoupParser:
    """Parser using the default lxml builder."""
    return BeautifulSoupParser()


@pytest.fixture
def sample_tree() -> Document:
    """
    Hand-built tree, independent of any parser:

    <html><body>
      <section class="intro"><div id="x">hi <b>there</b></div></section>
      <div id="y" data-role="x"><div class="inner">nested</div></div>
      <p>tail</p>
    </body></html>
    """
    return Document(
        [
            Element(
                "html",
                children=[
                    Element(
                        "body",
                        children=[
                            Element(
                                "section",
                                {"class": "intro"},
                                [
                                    Element(
                                        "div",
                                        {"id": "x"},
                                        [Text("hi "), Element("b", None, [Text("there")])],
                                    )
                                ],
                            ),
                            Element(
                                "div",
                                {"id": "y", "data-role": "x"},
                                [Element("div", {"class": "inner"}, [Text("nested")])],
                            ),
                            Element("p", None, [Text("tail")]),
                        ],
                    )
                ],
            )
        ]
    )
