import os
from typing import Optional, Tuple

import pandas as pd

from mindep.source.frame import DataFrameSource
from mindep.util.errors import TableNotFoundException


def table_name_from_path(data_path: str) -> str:
    return os.path.splitext(os.path.basename(data_path))[0]


def load_df(data_path: str) -> pd.DataFrame:
    if not os.path.isfile(data_path):
        raise TableNotFoundException(f"Dataset file {data_path} does not exist.")
    return pd.read_csv(data_path)


def load_csv_source(
    data_path: str, table: Optional[str] = None
) -> Tuple[DataFrameSource, str]:
    """
    Loads a CSV file as a single-table data source.

    Args:
        data_path (str): Path to the CSV file.
        table (Optional[str]): The table name; defaults to the file name without extension.

    Returns:
        Tuple[DataFrameSource, str]: The source and the name the table is registered under.
    """
    name = table or table_name_from_path(data_path)
    return DataFrameSource({name: load_df(data_path)}), name
