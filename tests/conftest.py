from pathlib import Path

import pytest

from sauce.context import RenderContext

from tests.infrastructure.file_utils import write


@pytest.fixture
def ctx():
    """Empty render context with one open frame."""
    context = RenderContext()
    context.push()
    return context


@pytest.fixture
def model_ctx():
    """Render context over a small model, one frame open."""
    context = RenderContext({
        "name": "World",
        "x": 5,
        "items": [1, 2, 3],
        "user": {"name": "Ann", "age": 30, "member": True, "tags": []},
        "empty": "",
    })
    context.push()
    return context


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Working directory with a template, a YAML data file and a config."""
    root = tmp_path
    write(root / "hello.tpl", "Hello {% name %}!")
    write(root / "data.yaml", "name: World\n")
    write(root / "sauce.yaml", "markers:\n  begin: \"<%\"\n  end: \"%>\"\n")
    return root
