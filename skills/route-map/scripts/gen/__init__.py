from .template import flatten_routes, make_spec, slugify
from .writer import generate_tests

__all__ = ["flatten_routes", "generate_tests", "make_spec", "slugify"]
