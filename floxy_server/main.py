from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from floxy_server.service.runtime import FlowRuntime

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Floxy Flow")
runtime = FlowRuntime()


class FlowRequest(BaseModel):
    source: str | None = None


class ExportRequest(BaseModel):
    source: str | None = None
    format: str = "Mermaid"


@app.get("/flow")
async def show_placeholder_flow():
    return runtime.show()


@app.post("/flow")
async def show_flow(payload: FlowRequest):
    return runtime.show(payload.source)


@app.post("/export")
async def export_flow(payload: ExportRequest):
    return runtime.export(payload.source, payload.format)


@app.get("/visualizer", response_class=HTMLResponse)
async def placeholder_visualizer():
    return runtime.page()


@app.post("/visualizer", response_class=HTMLResponse)
async def flow_visualizer(payload: FlowRequest):
    return runtime.page(payload.source)


@app.get("/resources")
async def list_resources():
    return runtime.list_resources()


@app.get("/resources/{resource_name}")
async def get_resource(resource_name: str):
    return runtime.get_resource(resource_name)
