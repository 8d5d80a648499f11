"""Dense linear algebra helpers: LU factorisation, SVD and tridiagonal solvers."""