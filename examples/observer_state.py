# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "topojax"]
#
# [tool.uv.sources]
# topojax = { path = ".." }
# ///
"""Print the geocentric state of a ground observer in the ecliptic mean J2000 frame.

UT1-UTC comes from the cached IERS finals file (downloaded on first use), or
is taken as zero with ``--no-eop``.  A series of epochs is evaluated in a
single JIT-compiled ``vmap`` call.

Requires topojax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/observer_state.py [OPTIONS]

Examples:
    # Haleakala at the default epoch, UT1 = UTC
    uv run examples/observer_state.py --no-eop

    # Twelve hourly states for a custom site with IERS UT1-UTC
    uv run examples/observer_state.py --longitude 289.26345 --latitude -30.2446 \\
        --height 2647.0 --mjd 60000.0 --steps 12 --interval 3600
"""

import logging
import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from topojax import Epoch, TimeResolutionError, load_cached_eop, pvobs, set_dtype, zero_eop

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    longitude: Annotated[float, typer.Option(help="East longitude in degrees")] = 203.744090,
    latitude: Annotated[float, typer.Option(help="Geodetic latitude in degrees")] = 20.707233557,
    height: Annotated[float, typer.Option(help="Height above the ellipsoid in metres")] = 3067.694,
    mjd: Annotated[float, typer.Option(help="First epoch, MJD (UTC)")] = 57028.479297592596,
    steps: Annotated[int, typer.Option(help="Number of epochs")] = 1,
    interval: Annotated[float, typer.Option(help="Spacing between epochs in seconds")] = 600.0,
    eop: Annotated[bool, typer.Option(help="Use IERS UT1-UTC (--no-eop for UT1 = UTC)")] = True,
    verbose: Annotated[bool, typer.Option(help="Log EOP download progress")] = False,
):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)

    if eop:
        try:
            eop_data = load_cached_eop()
        except TimeResolutionError as err:
            print(f"ERROR: {err}")
            raise typer.Exit(code=1) from err
        print(f"EOP data covers MJD {float(eop_data.mjd_min):.1f} - {float(eop_data.mjd_max):.1f}")
    else:
        eop_data = zero_eop()

    mjds = mjd + jnp.arange(steps) * interval / 86400.0
    compute = jax.jit(jax.vmap(lambda m: pvobs(eop_data, m, longitude, latitude, height)))

    t0 = time.perf_counter()
    states = compute(mjds)
    states.position.block_until_ready()
    print(f"Computed {steps} observer states in {time.perf_counter() - t0:.3f}s\n")

    print(f"{'epoch (UTC)':<28} {'x [AU]':>14} {'y [AU]':>14} {'z [AU]':>14}"
          f" {'vx [AU/d]':>14} {'vy [AU/d]':>14} {'vz [AU/d]':>14}")
    for i in range(steps):
        x, y, z = (float(c) for c in states.position[i])
        vx, vy, vz = (float(c) for c in states.velocity[i])
        label = str(Epoch(mjds[i]))
        print(f"{label:<28} {x:14.6e} {y:14.6e} {z:14.6e} {vx:14.6e} {vy:14.6e} {vz:14.6e}")


if __name__ == "__main__":
    typer.run(main)
