"""
Layout of the per-point solution vector.

Each grid point carries ``[u, V, T, lambda, Y_0 .. Y_{K-1}]``; points are
stored one after another, so component ``n`` of point ``j`` lives at
``x[j*nv + n]``.
"""
C_OFFSET_U = 0  # axial mass flux variable (velocity u, combined with rho)
C_OFFSET_V = 1  # radial velocity gradient V = v/r
C_OFFSET_T = 2  # temperature
C_OFFSET_L = 3  # pressure-curvature eigenvalue lambda
C_OFFSET_Y = 4  # first species mass fraction

COMPONENT_NAMES = ("u", "V", "T", "lambda")
