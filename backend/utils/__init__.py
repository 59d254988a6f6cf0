from .metrics import calculate_fcr, calculate_mortality_rate

__all__ = ['calculate_fcr', 'calculate_mortality_rate']
