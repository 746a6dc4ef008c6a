from .history import history_to_dataframe

__all__ = ["history_to_dataframe"]
