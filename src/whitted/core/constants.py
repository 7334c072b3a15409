"""Numerical tolerances and rendering defaults shared across the package.

All fuzzy comparisons (tuple/matrix equality, hit bias, shadow bias,
pattern boundaries) use EPSILON so that behaviour does not depend on the
call site.
"""

# Tolerance for float equality and for nudging hit points off a surface
EPSILON = 1e-5

# Determinants with a smaller magnitude are treated as singular
SINGULAR_EPSILON = 1e-12

# Reflection/refraction recursion budget used when none is given
DEFAULT_MAX_BOUNCES = 5
