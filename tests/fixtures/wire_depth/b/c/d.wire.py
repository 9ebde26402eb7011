def wire(ctx):
    ctx['calls'].append('b/c/d')
