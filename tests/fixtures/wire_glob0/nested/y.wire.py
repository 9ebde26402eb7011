def wire(ctx):
    ctx.set('y', ctx.get('x'))
