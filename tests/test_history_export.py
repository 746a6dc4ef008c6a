import sys

import pytest

from popopt.ux import history_to_dataframe


def test_history_to_dataframe():
    pd = pytest.importorskip("pandas")

    df = history_to_dataframe([1.0, 2.5, 2.5])

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["iteration", "best"]
    assert df["iteration"].tolist() == [1, 2, 3]
    assert df["best"].tolist() == [1.0, 2.5, 2.5]


def test_history_to_dataframe_empty():
    pytest.importorskip("pandas")
    assert len(history_to_dataframe([])) == 0


def test_history_to_dataframe_without_pandas(monkeypatch):
    monkeypatch.setitem(sys.modules, "pandas", None)
    with pytest.raises(ImportError, match="pip install"):
        history_to_dataframe([1.0])
