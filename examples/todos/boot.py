"""
Boot procedure of the todos example.

Run it with::

    bootwire boot examples/todos/boot.py
"""


async def wire(ctx):
    await ctx.discover('**/*.wire.py')
