# core/constants.py

# Smallest ray parameter accepted as a forward hit ("almost zero"). Roots at or
# below it are treated as self-intersections or grazing noise.
EPSILON = 1e-8

# Sentinel returned by shape intersection routines when the ray misses.
NO_HIT = -1.0
