from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pathlib import Path
import os

app = FastAPI(title="Mock Rates Page Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/rates_stub") if os.path.exists("/rates_stub") else Path(__file__).resolve().parents[1] / "rates_stub"

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/")
def root(): return HTMLResponse("<html><body>Mock rates site</body></html>")

@app.get("/{locale}/rates")
def get_rates_page(locale: str):
    file = DATA_DIR / f"rates_{locale}.html"
    if not file.exists():
        raise HTTPException(status_code=404, detail="page not found")
    return HTMLResponse(content=file.read_text(encoding="utf-8"))
