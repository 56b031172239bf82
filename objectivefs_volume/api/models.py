"""
Pydantic models for the Docker volume plugin protocol.

Docker sends and expects capitalized JSON keys; the models expose snake_case
attributes and map them with aliases.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PluginModel(BaseModel):
    """Base model accepting both the protocol keys and the attribute names."""

    model_config = ConfigDict(populate_by_name=True)


# Requests


class VolumeNameRequest(PluginModel):
    """Request body carrying only a volume name (Get, Path, Remove)."""

    name: str = Field(..., alias="Name", description="Volume name")


class VolumeCreateRequest(PluginModel):
    """Request model for VolumeDriver.Create."""

    name: str = Field(..., alias="Name", description="Volume name")
    opts: Optional[Dict[str, Optional[str]]] = Field(None, alias="Opts", description="Driver options")


class VolumeMountRequest(PluginModel):
    """Request model for VolumeDriver.Mount and VolumeDriver.Unmount."""

    name: str = Field(..., alias="Name", description="Volume name")
    id: str = Field("", alias="ID", description="Caller (container) ID")


# Responses


class Volume(PluginModel):
    """Volume as reported to Docker."""

    name: str = Field(..., alias="Name")
    mountpoint: str = Field(..., alias="Mountpoint")
    created_at: str = Field(..., alias="CreatedAt")
    status: Optional[Dict[str, object]] = Field(None, alias="Status")


class ErrorResponse(PluginModel):
    """Generic response; an empty Err means success."""

    err: str = Field("", alias="Err")


class ActivateResponse(PluginModel):
    implements: List[str] = Field(["VolumeDriver"], alias="Implements")


class VolumeListResponse(ErrorResponse):
    volumes: List[Volume] = Field(default_factory=list, alias="Volumes")


class VolumeGetResponse(ErrorResponse):
    volume: Optional[Volume] = Field(None, alias="Volume")


class MountpointResponse(ErrorResponse):
    """Response model for VolumeDriver.Path and VolumeDriver.Mount."""

    mountpoint: str = Field("", alias="Mountpoint")


class Capability(PluginModel):
    scope: str = Field("local", alias="Scope")


class CapabilitiesResponse(PluginModel):
    capabilities: Capability = Field(default_factory=Capability, alias="Capabilities")
