"""
Tests booting the todos example application.
"""

from pathlib import Path

import pytest

from bootwire import bootwire
from bootwire.infrastructure.wiring.loader import WiringLoader

TODOS_BOOT = Path(__file__).parent.parent / "examples" / "todos" / "boot.py"


@pytest.fixture
def app():
    return bootwire(WiringLoader().load(TODOS_BOOT))


@pytest.mark.asyncio
class TestTodosExample:
    """Test cases for the todos example."""

    async def test_boot_wires_repository(self, app) -> None:
        context = await app.boot()

        assert context.get('config.page_size') == 20
        context['backend'].add('write tests')
        assert [todo['title'] for todo in context['todos'].get_todos()] == ['write tests']

    async def test_overrides_replace_config(self, app) -> None:
        context = await app.boot({'config': {'page_size': 1}})

        backend = context['backend']
        backend.add('first')
        backend.add('second')

        assert context['todos'].page_size == 1
        assert len(context['todos'].get_todos()) == 1

    async def test_each_wiring_file_runs_once(self, app) -> None:
        context = await app.boot()

        names = sorted(path.name for path in context.loaded_files)
        assert names == ['boot.py', 'config.wire.py', 'todos.wire.py']
