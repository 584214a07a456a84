from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from floxy_server.service.resources import get_resource, list_resources
from floxy_server.service.tools import export_to_format, render_page, show_flow

logger = logging.getLogger(__name__)


class FlowRuntime:
    def show(self, source: Optional[str] = None) -> Dict[str, Any]:
        logger.info("runtime show invoked")
        return show_flow(source)

    def export(self, source: Optional[str], format_type: str) -> Dict[str, Any]:
        logger.info("runtime export invoked")
        return export_to_format(source, format_type)

    def page(self, source: Optional[str] = None) -> str:
        logger.info("runtime page invoked")
        return render_page(source)

    def list_resources(self) -> Dict[str, Any]:
        logger.info("runtime list_resources invoked")
        return {"resources": list_resources()}

    def get_resource(self, resource_name: str) -> Dict[str, Any]:
        logger.info("runtime get_resource invoked")
        resource = get_resource(resource_name)
        if resource is None:
            return {
                "errors": [
                    {
                        "code": "resource_not_found",
                        "message": f"Unknown resource: {resource_name}",
                    }
                ]
            }
        return resource
