async def wire(ctx):
    ctx['calls'].append('subdir')

    await ctx.discover('**/*.wire.py')
