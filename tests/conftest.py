"""Pytest configuration and fixtures for htmpl tests."""

import pytest

from htmpl import DictLoader, Environment


@pytest.fixture
def env():
    """Create a basic htmpl Environment."""
    return Environment()


@pytest.fixture
def env_strict():
    """Create an Environment that rejects broken block structure."""
    return Environment(strict_blocks=True)


@pytest.fixture
def env_with_loader():
    """Create an Environment with a DictLoader and test templates."""
    loader = DictLoader(
        {
            "header.tmpl": '<h1><tmpl_var name="title"></h1>',
            "row.tmpl": "<td><tmpl_var name=\"v\"></td>",
            "nested.tmpl": '[<tmpl_include name="header.tmpl">]',
            "page.tmpl": (
                '<tmpl_include name="header.tmpl">'
                '<tmpl_loop name="rows"><tmpl_var name="v"></tmpl_loop>'
            ),
            "a.tmpl": 'a<tmpl_include name="b.tmpl">',
            "b.tmpl": 'b<tmpl_include name="a.tmpl">',
            "empty.tmpl": "",
        }
    )
    return Environment(loader=loader)


def render(env: Environment, source: str, data=None) -> str:
    """Compile ``source`` and render it once with ``data``."""
    return env.from_string(source).render(data)
