"""DataFrame builders for the category tables."""
import pandas as pd

from biostats.domain.stats import Category, CategoryRow


def rows_to_frame(category: Category, rows: list[CategoryRow]) -> pd.DataFrame:
    """Table for one category; counts are display strings so ``N/A`` survives."""
    return pd.DataFrame(
        [(row.name, row.display_count) for row in rows],
        columns=[category.name_label, category.count_label],
    )
