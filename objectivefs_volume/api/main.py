"""
FastAPI application implementing the Docker volume plugin protocol.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from objectivefs_volume import __version__
from objectivefs_volume.api.models import (
    ActivateResponse,
    CapabilitiesResponse,
    ErrorResponse,
    MountpointResponse,
    VolumeCreateRequest,
    VolumeGetResponse,
    VolumeListResponse,
    VolumeMountRequest,
    VolumeNameRequest,
)
from objectivefs_volume.api.services import volume_service
from objectivefs_volume.cli.lib.config import load_config
from objectivefs_volume.driver.coordinator import MountCoordinator
from objectivefs_volume.driver.exceptions import VolumeDriverError

logger = logging.getLogger(__name__)

PLUGIN_CONTENT_TYPE = "application/vnd.docker.plugins.v1+json"


class PluginJSONResponse(JSONResponse):
    media_type = PLUGIN_CONTENT_TYPE


def _coordinator(request: Request) -> MountCoordinator:
    return request.app.state.coordinator


def create_app(coordinator: Optional[MountCoordinator] = None) -> FastAPI:
    """
    Build the plugin application.

    Args:
        coordinator: Mount coordinator to serve; built from the loaded config if omitted

    Returns:
        FastAPI application
    """
    if coordinator is None:
        coordinator = volume_service.build_coordinator(load_config())

    app = FastAPI(
        title="ObjectiveFS Volume Plugin",
        description="Docker volume plugin for ObjectiveFS",
        version=__version__,
        default_response_class=PluginJSONResponse,
    )
    app.state.coordinator = coordinator

    @app.exception_handler(VolumeDriverError)
    async def volume_driver_error_handler(request: Request, exc: VolumeDriverError) -> JSONResponse:
        """Report driver errors the way Docker expects them."""
        logger.warning("%s failed: %s", request.url.path, exc)
        return PluginJSONResponse(status_code=500, content={"Err": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}" for error in exc.errors()
        )
        return PluginJSONResponse(status_code=422, content={"Err": f"invalid request: {problems}"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler."""
        request_id = str(uuid.uuid4())
        logger.exception("Unhandled error (request_id=%s, path=%s)", request_id, request.url.path)
        return PluginJSONResponse(status_code=500, content={"Err": f"internal error (request_id={request_id})"})

    @app.post("/Plugin.Activate", response_model=ActivateResponse)
    def activate() -> Dict[str, Any]:
        """
        Plugin handshake.
        """
        return {"Implements": ["VolumeDriver"]}

    @app.post("/VolumeDriver.Create", response_model=ErrorResponse)
    def create_volume(body: VolumeCreateRequest, request: Request) -> Dict[str, Any]:
        """
        Register a new volume. Nothing is mounted until the first Mount.
        """
        volume_service.create_volume(_coordinator(request), body)
        return {"Err": ""}

    @app.post("/VolumeDriver.List", response_model=VolumeListResponse, response_model_exclude_none=True)
    def list_volumes(request: Request) -> Dict[str, Any]:
        """
        List all volumes.
        """
        return {"Volumes": volume_service.list_volumes(_coordinator(request)), "Err": ""}

    @app.post("/VolumeDriver.Get", response_model=VolumeGetResponse, response_model_exclude_none=True)
    def get_volume(body: VolumeNameRequest, request: Request) -> Dict[str, Any]:
        return {"Volume": volume_service.get_volume(_coordinator(request), body.name), "Err": ""}

    @app.post("/VolumeDriver.Path", response_model=MountpointResponse)
    def volume_path(body: VolumeNameRequest, request: Request) -> Dict[str, Any]:
        return {"Mountpoint": volume_service.volume_path(_coordinator(request), body.name), "Err": ""}

    @app.post("/VolumeDriver.Mount", response_model=MountpointResponse)
    def mount_volume(body: VolumeMountRequest, request: Request) -> Dict[str, Any]:
        """
        Attach a container to a volume, mounting it on first use.
        """
        return {"Mountpoint": volume_service.mount_volume(_coordinator(request), body), "Err": ""}

    @app.post("/VolumeDriver.Unmount", response_model=ErrorResponse)
    def unmount_volume(body: VolumeMountRequest, request: Request) -> Dict[str, Any]:
        """
        Detach a container from a volume.

        The filesystem is unmounted only for `asap` volumes once no container uses it.
        """
        volume_service.unmount_volume(_coordinator(request), body)
        return {"Err": ""}

    @app.post("/VolumeDriver.Remove", response_model=ErrorResponse)
    def remove_volume(body: VolumeNameRequest, request: Request) -> Dict[str, Any]:
        """
        Remove a volume, unmounting it first if it is still mounted.
        """
        volume_service.remove_volume(_coordinator(request), body.name)
        return {"Err": ""}

    @app.post("/VolumeDriver.Capabilities", response_model=CapabilitiesResponse)
    def capabilities(request: Request) -> Dict[str, Any]:
        return {"Capabilities": volume_service.capabilities(_coordinator(request))}

    return app
