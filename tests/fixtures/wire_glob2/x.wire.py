def wire(ctx):
    ctx.set('x', 2)
    ctx['calls'].append('x')
