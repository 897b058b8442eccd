import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import List
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import pandas as pd
import uvicorn

from mf_directory.client import FundDirectoryClient
from mf_directory.models import SchemeRecord

# ---- FastAPI app ----
app = FastAPI(title="MF Directory API")

# Dev-time: allow all origins. In prod lock this down.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Thread pool for blocking IO (network + cache file + pandas)
executor = ThreadPoolExecutor(max_workers=8)

# one directory per process; loaded lazily from schema_codes.txt
client = FundDirectoryClient()


def _dump(schemes: List[SchemeRecord]):
    return [s.model_dump(by_alias=True) for s in schemes]


# ---- Search endpoint (typeahead) ----
@app.get("/api/search")
async def api_search(q: str = ""):
    """
    Ordered-words search over the cached scheme list.
    Returns schemeCode / schemeName / isin* objects in directory order.
    """
    if not q or len(q.strip()) < 1:
        return []
    loop = asyncio.get_event_loop()
    try:
        results = await loop.run_in_executor(executor, lambda: client.search_by_name(q))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _dump(results)


# ---- Directory endpoints ----
@app.get("/api/schemes")
async def api_list_schemes():
    loop = asyncio.get_event_loop()
    schemes = await loop.run_in_executor(executor, client.list_all)
    return _dump(schemes)


@app.post("/api/schemes/refresh")
async def api_refresh_schemes(force: bool = False):
    """
    force=true pulls /mf from mfapi.in and rewrites the cache before reloading.
    Failures are not errors here: check "count" (0 means nothing is loaded).
    """
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(executor, lambda: client.refresh_directory(force_pull=force))
    schemes = await loop.run_in_executor(executor, client.list_all)
    return {"count": len(schemes)}


# ---- NAV endpoints ----
@app.get("/api/schemes/{scheme_code}/nav")
async def api_scheme_nav(scheme_code: str, historic: bool = False):
    loop = asyncio.get_event_loop()
    data = await loop.run_in_executor(
        executor,
        lambda: client.get_valuation(scheme_code, need_historic=historic)
    )
    if data is None:
        raise HTTPException(status_code=502, detail=f"NAV unavailable for scheme {scheme_code}")
    return data


@app.get("/api/schemes/{scheme_code}/history")
async def api_scheme_history(scheme_code: str):
    """Historical NAVs as [{date, nav}] rows, oldest first, ISO dates."""
    loop = asyncio.get_event_loop()
    nav_df = await loop.run_in_executor(executor, lambda: client.get_nav_history(scheme_code))
    if nav_df is None:
        raise HTTPException(status_code=502, detail=f"NAV history unavailable for scheme {scheme_code}")

    # convert dates to ISO strings for JSON
    nav_serial = nav_df.copy()
    nav_serial['date'] = pd.to_datetime(nav_serial['date']).dt.strftime('%Y-%m-%d')
    return nav_serial.to_dict(orient='records')


# ---- run with: python -m uvicorn main:app --reload (or uvicorn main:app --reload) ----
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
