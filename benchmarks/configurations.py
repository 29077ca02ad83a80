"""configurations for benchmarks."""

from neighborhoods import (
    Boundary,
    EllipseNeighborhood,
    OutOfBoundsMirrorFactory,
    OutOfBoundsPeriodicFactory,
    RectangleNeighborhood,
)

configurations = {
    # RectangleNeighborhood Configurations
    RectangleNeighborhood: {
        "small": {
            "seeds": 20,
            "replications": 5,
            "shape": (64, 64),
            "span": (1, 1),
            "positions": 200,
            "out_of_bounds": OutOfBoundsPeriodicFactory,
        },
        "large": {
            "seeds": 5,
            "replications": 3,
            "shape": (32, 32, 32),
            "span": (3, 3, 3),
            "positions": 50,
            "out_of_bounds": OutOfBoundsPeriodicFactory,
        },
    },
    # EllipseNeighborhood Configurations
    EllipseNeighborhood: {
        "small": {
            "seeds": 20,
            "replications": 5,
            "shape": (64, 64),
            "span": (3, 2),
            "positions": 200,
            "out_of_bounds": lambda: OutOfBoundsMirrorFactory(Boundary.DOUBLE),
        },
        "large": {
            "seeds": 5,
            "replications": 3,
            "shape": (512, 512),
            "span": (15, 10),
            "positions": 50,
            "out_of_bounds": lambda: OutOfBoundsMirrorFactory(Boundary.SINGLE),
        },
    },
}
