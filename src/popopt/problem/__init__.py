from .functions import integer_sum, negated_sphere, rastrigin, sphere

__all__ = ["integer_sum", "negated_sphere", "rastrigin", "sphere"]
