"""
Background Mode Presets

Each entry names a mode, carries the prose shown alongside it (the
colophon) and the tuning values its Mode class starts from. Mode
constructors accept keyword overrides for any key in "params".
"""

PRESETS = {
    "ocean": {
        "name": "Ocean Currents",
        "summary": "Layered Gerstner swells with perspective and caustics",
        "description": (
            "My favorite color is the blue you see when you're on a boat and the\n"
            "seafloor drops away into nothing, that moment where the water goes from\n"
            "turquoise to something almost black and you realize there's a mile of\n"
            "water beneath you and it's beautiful and terrifying.\n"
            "Gerstner waves and perspective fade. Caustics from light bending through\n"
            "surfaces that will never quite repeat."
        ),
        "params": {
            "layers": 7,
            "stroke_spacing": 20,
            "sample_step": 7,
            "fade": 0.05,
            "time_step": 0.028,
            "caustics": 10,
            "caustic_alpha": 0.018,
        },
    },
    "fractal": {
        "name": "Julia Set",
        "summary": "Escape-time Julia set with a slowly drifting c",
        "description": (
            "A Julia set, which means you pick a complex number c and then for\n"
            "each pixel you keep doing z² + c over and over to see if it flies off\n"
            "to infinity or stays bounded, coloring by how quickly it escapes. The\n"
            "wild thing is the boundary between \"escapes\" and \"stays forever\" turns\n"
            "out to have infinite detail no matter how far you zoom in."
        ),
        "params": {
            "max_iter": 60,
            "zoom": 1.3,
            "drift": 0.045,
            "time_step": 0.006,
            "pan": 0.15,
            "jitter": 0.05,
            "downsample": 2,
        },
    },
    "flow": {
        "name": "Curl Flow",
        "summary": "Particles advected through curl noise",
        "description": (
            "Particles following a vector field built from layered Perlin noise\n"
            "and the curl trick keeps everything divergence-free so the streams swirl\n"
            "around without bunching up or thinning out, same math behind weather\n"
            "systems and ocean currents but smaller and prettier and you can watch\n"
            "it happen in real time."
        ),
        "params": {
            "max_particles": 200,
            "area_per_particle": 12000,
            "fade": 0.012,
            "time_scale": 0.00008,
            "pointer_radius": 250.0,
            "pointer_strength": 0.15,
            "margin": 50.0,
            "line_width": 1.4,
        },
    },
    "constellation": {
        "name": "Constellation",
        "summary": "Drifting stars joined by proximity lines",
        "description": (
            "Points drifting around and gently pulling toward each other, and\n"
            "when two get close enough a line appears between them. No grand logic\n"
            "to it, just proximity, but somehow it ends up looking like neurons\n"
            "firing or friends clustering at a party or the way ideas connect when\n"
            "you're not forcing it. Connections fade when things drift apart."
        ),
        "params": {
            "max_stars": 120,
            "area_per_star": 12000,
            "repel_distance": 60.0,
            "attract_distance": 150.0,
            "connection_distance": 120.0,
            "pointer_radius": 100.0,
            "damping": 0.992,
        },
    },
    "lorenz": {
        "name": "Lorenz Attractor",
        "summary": "Eight chaotic trails with varied parameters",
        "description": (
            "Ed Lorenz stumbled onto this in 1963 while modeling weather on an\n"
            "early computer and found that the equations are totally deterministic,\n"
            "no randomness at all, yet tiny differences in where you start lead to\n"
            "wildly different paths which is basically why weather forecasts become\n"
            "useless after about a week no matter how good our models get."
        ),
        "params": {
            "trails": 8,
            "trail_length": 1200,
            "fade": 0.025,
            "rotation_speed": 0.00015,
            "max_alpha": 0.14,
        },
    },
    "voronoi": {
        "name": "Delaunay Mesh",
        "summary": "Wandering points re-triangulated every frame",
        "description": (
            "Each point owns all the space closer to it than to any other point\n"
            "which forms these cells, and the triangles are what you get when you\n"
            "connect neighbors. Shows up everywhere once you start looking for it:\n"
            "soap bubbles, giraffe spots, cracked mud, cell walls, the way galaxies\n"
            "cluster across the universe."
        ),
        "params": {
            "max_points": 60,
            "area_per_point": 25000,
            "damping": 0.985,
            "padding": 50.0,
            "bounce": -0.3,
            "pointer_radius": 150.0,
        },
    },
    "lissajous": {
        "name": "Lissajous Curves",
        "summary": "Low-integer frequency ratios tracing closed loops",
        "description": (
            "Two waves at right angles with different frequencies and the ratio\n"
            "between them determines what shape you get, so 3:4 gives you one kind\n"
            "of loop and 5:7 gives you another and engineers used to watch these on\n"
            "oscilloscopes to check if frequencies matched up before we had better\n"
            "ways to measure things."
        ),
        "params": {
            "min_curves": 3,
            "max_curves": 5,
            "trail_length": 1000,
            "fade": 0.02,
            "max_alpha": 0.12,
            "pointer_bias": 0.3,
        },
    },
}

# Order of the mode toggles (and number keys in the viewer)
MODE_ORDER = ["ocean", "fractal", "flow", "constellation", "lorenz", "voronoi", "lissajous"]


def get_preset(name):
    """Return the preset dict for a mode name. Raises KeyError if unknown."""
    return PRESETS[name]


def list_modes():
    """List of (key, name, summary) tuples in toggle order."""
    return [(key, PRESETS[key]["name"], PRESETS[key]["summary"]) for key in MODE_ORDER]
