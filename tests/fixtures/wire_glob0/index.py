async def wire(ctx):
    await ctx.discover('**/*.wire.py')
