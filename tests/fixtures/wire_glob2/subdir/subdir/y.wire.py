def wire(ctx):
    ctx.set('y', ctx.get('x'))
    ctx['calls'].append('y')
