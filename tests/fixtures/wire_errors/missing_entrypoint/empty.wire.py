def setup(ctx):
    ctx.set('never', True)
