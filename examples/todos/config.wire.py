def wire(ctx):
    ctx.set('config', {
        'backend': {'name': 'memory'},
        'page_size': 20,
    })
