from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    import numpy as np

    from theta_pde import (
        BoundaryCondition1D,
        ConstantCoeffSampler1D,
        FiniteDiffDiscretizer1D,
        RegularGrid1D,
        build_time_grid,
        make_scheme,
        propagate,
        rollback,
    )

    # log-spot grid, Black-Scholes generator with sigma=0.2, r=0.05
    sigma, rate = 0.20, 0.05
    grid = RegularGrid1D(size=201, boundary_inf=np.log(20.0), boundary_sup=np.log(500.0))
    sampler = ConstantCoeffSampler1D(
        grid=grid,
        diffusion=0.5 * sigma**2,
        drift=rate - 0.5 * sigma**2,
        reaction=-rate,
    )
    disc = FiniteDiffDiscretizer1D(
        sampler,
        inf_bc=BoundaryCondition1D.NO_CONVEXITY,
        sup_bc=BoundaryCondition1D.NO_CONVEXITY,
    )
    scheme = make_scheme(disc, "cn")
    times = build_time_grid(0.0, 1.0, 100)

    spot = np.exp(grid.nodes)
    call = rollback(scheme, np.maximum(spot - 100.0, 0.0), times)
    print("CN call @ S=100:", np.interp(100.0, spot, call.u_final))

    # density of log-spot started near log(100)
    p0 = np.zeros(grid.size)
    p0[int(np.argmin(np.abs(spot - 100.0)))] = 1.0
    density = propagate(scheme, p0, times)
    print("discount factor:", density.u_final.sum())
    print("discounted forward:", density.u_final @ spot)
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
