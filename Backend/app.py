from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import unquote, urlparse

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from pydantic import BaseModel, Field, field_validator

BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Add parent directory to path for catalog/provider imports
sys.path.insert(0, str(BASE_DIR))
from catalog import DocumentCatalog, TreeNode
from provider import ManPageProvider

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Configuration
DEFAULT_PORT = int(os.environ.get("MANVIEW_PORT", "8810"))
TEMP_DIR = os.environ.get("MANVIEW_TEMP_DIR") or None
RENDER_WIDTH = int(os.environ.get("MANVIEW_RENDER_WIDTH", "80"))
PREBUILT_LOCATIONS = [
    location for location in os.environ.get("MANVIEW_LOCATIONS", "").split(os.pathsep) if location
]


class TreeNodeOut(BaseModel):
    title: str
    key: str
    kind: str
    synonyms: List[str]
    children: List["TreeNodeOut"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: TreeNode) -> "TreeNodeOut":
        return cls(
            title=node.title,
            key=node.key,
            kind=node.kind.value,
            synonyms=sorted(node.synonyms),
            children=[cls.from_node(child) for child in node.children],
        )


class SectionPayload(BaseModel):
    location: str = Field(..., min_length=1, description="Source location, e.g. a MANPATH directory.")
    category: str = Field(..., min_length=1, description="Category key, e.g. manual section '1'.")
    document: str = Field(..., min_length=1, description="Document id, e.g. 'ls'.")
    name: str = Field(..., min_length=1, max_length=200, description="Section heading, e.g. 'SYNOPSIS'.")

    @field_validator("location", "category", "document", "name")
    @classmethod
    def strip_value(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Value cannot be empty.")
        return cleaned


def build_catalog() -> DocumentCatalog:
    catalog = DocumentCatalog(
        ManPageProvider(),
        temp_dir=Path(TEMP_DIR) if TEMP_DIR else None,
        default_width=RENDER_WIDTH,
    )
    for location in PREBUILT_LOCATIONS:
        if catalog.get_tree(location) is None:
            logger.warning(f"⚠ No manual pages found at {location}")
        else:
            logger.info(f"✓ Catalog ready for {location}")
    return catalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.catalog = build_catalog()
    try:
        yield
    finally:
        app.state.catalog.close()
        logger.info("Catalog closed, rendered pages removed")


app = FastAPI(title="Manual Page Browser", version="1.0.0", lifespan=lifespan)


def get_catalog(request: Request) -> DocumentCatalog:
    return request.app.state.catalog


def require_node(
    catalog: DocumentCatalog,
    location: str,
    category: Optional[str] = None,
    document: Optional[str] = None,
) -> TreeNode:
    if catalog.get_tree(location) is None:
        raise HTTPException(status_code=404, detail=f"No documents found at '{location}'.")

    node = catalog.find_node(location, category, document)
    if node is None:
        address = "/".join(part for part in (category, document) if part)
        raise HTTPException(status_code=404, detail=f"Node '{address}' not found in '{location}'.")
    return node


@app.get("/health")
def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/tree")
def get_tree(
    location: str = Query(..., min_length=1),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Catalog tree of a location."""
    root = require_node(catalog, location)
    return JSONResponse(TreeNodeOut.from_node(root).model_dump())


@app.get("/api/search")
def search(
    q: str = Query(..., min_length=1),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Search titles and synonyms across every tree built so far."""
    results = [
        {"title": node.title, "key": node.key, "kind": node.kind.value, "location": node.root.key}
        for node in catalog.search(q.strip())
    ]
    return JSONResponse({"query": q, "results": results})


@app.get("/api/summary")
def get_summary(
    location: str = Query(..., min_length=1),
    category: str = Query(..., min_length=1),
    document: str = Query(..., min_length=1),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    node = require_node(catalog, location, category, document)
    return JSONResponse({"summary": catalog.summary(node)})


@app.get("/api/details")
def get_details(
    location: str = Query(..., min_length=1),
    category: str = Query(..., min_length=1),
    document: str = Query(..., min_length=1),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    node = require_node(catalog, location, category, document)
    return JSONResponse({"details": catalog.details(node)})


@app.get("/api/sections")
def get_sections(
    location: str = Query(..., min_length=1),
    category: str = Query(..., min_length=1),
    document: str = Query(..., min_length=1),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Section headings of a page, usable as a table of contents."""
    node = require_node(catalog, location, category, document)
    return JSONResponse({"sections": catalog.sections(node)})


@app.post("/api/section")
def get_section(
    payload: SectionPayload,
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    node = require_node(catalog, payload.location, payload.category, payload.document)
    return JSONResponse({"name": payload.name, "text": catalog.section(node, payload.name)})


@app.get("/api/render")
def render(
    location: str = Query(..., min_length=1),
    category: Optional[str] = None,
    document: Optional[str] = None,
    width: Optional[int] = Query(None, ge=20, le=400),
    catalog: DocumentCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Render a node; returns a file:// locator for the page."""
    node = require_node(catalog, location, category, document)
    locator, transient = catalog.render(node, width=width)
    return JSONResponse({"locator": locator, "transient": transient})


@app.get("/api/view")
def view(
    location: str = Query(..., min_length=1),
    category: Optional[str] = None,
    document: Optional[str] = None,
    width: Optional[int] = Query(None, ge=20, le=400),
    catalog: DocumentCatalog = Depends(get_catalog),
):
    """Render a node and serve the page itself."""
    node = require_node(catalog, location, category, document)
    locator, transient = catalog.render(node, width=width)
    if not transient:
        return HTMLResponse(locator)
    return FileResponse(Path(unquote(urlparse(locator).path)), media_type="text/html")


def run_server(host: str = "0.0.0.0", port: int = DEFAULT_PORT, reload: bool = False) -> None:
    import uvicorn

    uvicorn.run(
        "app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    run_server(port=DEFAULT_PORT, reload=False)
