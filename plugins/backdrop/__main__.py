"""
Generative Backdrop Viewer - Entry Point

Usage:
    python -m backdrop [mode] [--window WxH] [--seed N] [--snap N]

Examples:
    python -m backdrop
    python -m backdrop lorenz
    python -m backdrop voronoi --window 1920x1080
    python -m backdrop all --snap 300 --seed 7

Modes:
    ocean          - Layered Gerstner swells with perspective and caustics
    fractal        - Escape-time Julia set with a drifting c
    flow           - Particles advected through curl noise
    constellation  - Drifting stars joined by proximity lines
    lorenz         - Eight chaotic Lorenz trails
    voronoi        - Wandering points re-triangulated every frame
    lissajous      - Low-integer frequency ratio loops

Use --list to see all modes.
"""

import os
import sys

from .presets import MODE_ORDER, list_modes


def snap(mode, width, height, steps, seed=None, screenshots_dir=None):
    """Headless mode: run N ticks, save screenshot, exit."""
    from PIL import Image
    from .scheduler import Scheduler

    if screenshots_dir is None:
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
    os.makedirs(screenshots_dir, exist_ok=True)

    modes_to_snap = [mode] if mode != "all" else MODE_ORDER

    for key in modes_to_snap:
        print(f"  {key}: running {steps} steps...", end="", flush=True)
        sched = Scheduler(width, height, mode=key, seed=seed)
        rgb = sched.render(steps)

        img = Image.fromarray(rgb)
        path = os.path.join(screenshots_dir, f"bg_{key}.png")
        img.save(path)
        img.save(os.path.join(screenshots_dir, "latest.png"))
        print(f" saved: {path}")


def main():
    mode = "ocean"
    win_w, win_h = 1280, 720
    snap_steps = 0
    seed = None

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--window" and i + 1 < len(args):
            parts = args[i + 1].split("x")
            win_w, win_h = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_steps = int(args[i + 1])
            i += 2
        elif arg == "--seed" and i + 1 < len(args):
            seed = int(args[i + 1])
            i += 2
        elif arg == "--list":
            print("\nAvailable modes:\n")
            for key, name, summary in list_modes():
                print(f"    {key:16s} {name:20s} {summary}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in MODE_ORDER or arg == "all":
            mode = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print(f"Use --list to see available modes")
            return

    if snap_steps > 0:
        print(f"Headless snap mode: {mode} @ {win_w}x{win_h}, {snap_steps} steps")
        snap(mode, win_w, win_h, snap_steps, seed=seed)
        return

    if mode == "all":
        mode = "ocean"

    from .viewer import Viewer

    print(f"Starting Generative Backdrop")
    print(f"  Mode: {mode}")
    print(f"  Window: {win_w}x{win_h}")
    print()

    viewer = Viewer(
        width=win_w,
        height=win_h,
        start_mode=mode,
        seed=seed,
    )
    viewer.run()


if __name__ == "__main__":
    main()
