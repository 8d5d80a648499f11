# radcavity

`radcavity` computes the polariton band structure of a single electron in an
infinite periodic `erf()` potential coupled to a cavity photon mode. The
coupling is treated beyond the long-wavelength approximation. Two Hamiltonians
are available:

* **RAD**: the Bogoliubov-transformed representation, with a phase-dressed
  potential and a renormalised electron mass.
* **pA**: the Coulomb gauge minimal-coupling (`p·A`) Hamiltonian.

For a given coupling strength and set of k-points, the package builds and
diagonalises the Hamiltonian. It returns the eigen-energies and the Coulomb
gauge photon number `<a† a>` of each eigenstate.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Parameters

Parameters are built from a list of eight strings, in this order:

| position | meaning                                                            |
|----------|--------------------------------------------------------------------|
| 0        | routine name (kept but not interpreted)                            |
| 1        | `wc_norm`: cavity frequency at zero photon wave vector             |
| 2        | `log_g_min`: log10 of the smallest coupling `g/ωc`                 |
| 3        | `log_g_max`: log10 of the upper end of the coupling grid (excluded) |
| 4        | `ng`: number of coupling strengths                                 |
| 5        | `nk`: number of k-points across the first Brillouin zone           |
| 6        | `n_kappa`: number of plane waves in the electronic basis           |
| 7        | `nf`: number of photon Fock states                                 |

`get_parameters` raises `ValueError` when arguments are missing or cannot be
parsed. The other fields of `Parameters` keep their defaults. For example,
`hamiltonian` is `"RAD"` and can be set to `"pA"`.

## Usage

A single k-point:

```python
from radcavity.parameters import get_parameters
from radcavity.rad_hamiltonian import get_couplings
from radcavity.solve_hamiltonian import solve_h

prm = get_parameters(["disp", "0.1", "-1", "0", "2", "60", "16", "5"])
prm.g_wc = prm.g_wc_grid[0]
prm.k = prm.k_points[0]
prm.wc = (prm.wc_norm**2 + prm.k**2) ** 0.5
prm.omega, prm.xi_g = get_couplings(prm)

energies, photon_numbers = solve_h(prm)
```

A whole dispersion for one coupling strength:

```python
from radcavity.parameters import get_parameters
from radcavity.solve_hamiltonian import parallel_dispatch

args = ["disp", "0.1", "-1", "0", "2", "60", "16", "5"]
prm = get_parameters(args)
data, data_color = parallel_dispatch(args, prm.k_points, prm.g_wc_grid[0])
```

In `data`, column 0 holds the k-points and the later columns hold the sorted
eigen-energies. `data_color` holds the matching photon numbers. The number of
k-points must equal `nk`. `parallel_dispatch` solves the points on a thread
pool and takes an optional `absorb_wc`, which fixes the cavity frequency for
every point. `serial_dispatch` solves the same points one after another.

The modules are:

* `radcavity.parameters`: `Parameters`, `get_parameters`, `identity`.
* `radcavity.rad_hamiltonian`: `construct_rad_h`, `get_couplings`, `get_a_rad`.
* `radcavity.pa_hamiltonian`: `construct_pa_h`, `get_a_pa`.
* `radcavity.solve_hamiltonian`: `construct_h_total`, `solve_h`,
  `parallel_dispatch`, `serial_dispatch`. An unknown `hamiltonian` name raises
  `ValueError`.

### Dense linear algebra helpers

`radcavity.linalg` holds small linear-algebra tools for NumPy arrays:

* `radcavity.linalg.solve`: LU factorisation (`factorize`, `LUFactorized`),
  `solve`, `solve_t`, `solve_h`, `inv`, `det`, `sln_det` and `rcond`. For a
  singular matrix, `sln_det` returns `(0, -inf)`.
* `radcavity.linalg.svd`: `svd` and divide-and-conquer `svddc`, with `JobSvd`
  (`ALL`, `SOME`, `NONE`).
* `radcavity.linalg.tridiagonal`: `Tridiagonal`, `LUFactorizedTridiagonal`,
  `extract_tridiagonal`, `factorize_tridiagonal`, `solve_tridiagonal`,
  `det_tridiagonal` and `rcond_tridiagonal`.

Errors are raised as `LinalgError`. A non-square input raises its subclass
`NotSquareError`.

## What the package does not do

The package is a library only. It has no command-line program. It does not
loop over the coupling grid for you, and it does not write or read result
files. It draws no plots, and it does not compute absorption histograms. To
get any of these, call `parallel_dispatch` for each coupling strength and
save or plot the arrays yourself. The linear-algebra helpers have no
Hermitian (Bunch–Kaufman) solver, no triangular solver and no trace function.

## Tests

```
pytest
```