def wire(ctx):
    ctx.set('x', 2)
