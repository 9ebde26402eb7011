from pathlib import Path

from bootwire.infrastructure.wiring import WiringLoader

todos = WiringLoader().load_module(Path(__file__).with_name('todos.py'))


async def wire(ctx):
    ctx = await ctx.wait_for('config')

    ctx.set('backend', todos.MemoryBackend())
    await ctx.provide('todos', lambda c: todos.TodosRepository(
        c['backend'], page_size=c.get('config.page_size', 20)))
