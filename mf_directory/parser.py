import pandas as pd

def nav_json_to_df(json_data):
    """
    json_data: historical payload from /mf/{schemeCode}
        {"meta": {...}, "data": [{"date": "dd-mm-YYYY", "nav": "123.45"}, ...]}
    returns DataFrame ['date','nav'] sorted oldest first
    """
    rows = json_data.get("data") or []
    if not rows:
        return pd.DataFrame({"date": pd.Series(dtype="datetime64[ns]"), "nav": pd.Series(dtype=float)})

    df = pd.DataFrame(rows)[["date", "nav"]]
    df["date"] = pd.to_datetime(df["date"], format="%d-%m-%Y")
    df["nav"] = df["nav"].astype(float)
    df = df.sort_values("date").reset_index(drop=True)
    return df
