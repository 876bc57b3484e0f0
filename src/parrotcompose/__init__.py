"""parrotcompose — frame-accurate animated parrot compositing.

Replicate a base parrot animation across color variants, layer static or
animated overlays on it in lockstep, and encode the result as a looping GIF.
Base characters and compositions are declared in YAML.
"""
