def wire(ctx):
    ctx['calls'].append('a')
