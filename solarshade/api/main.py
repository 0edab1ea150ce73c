"""
Solarshade REST API - FastAPI Application.

Provides REST endpoints for solar geometry and roof shading estimates.

Endpoints:
    GET  /                      - API info and health check
    GET  /health                - Health check
    POST /solar/position        - Sun position for a place and time
    POST /solar/hourly          - Hourly irradiance curve for one day
    GET  /solar/tilt            - Optimal tilt heuristic
    POST /shading/analyze       - Annual shading analysis of a roof
    POST /shading/obstacles     - Typical obstacles for a location class
    POST /shading/horizon       - Horizon profile of an obstacle set

Usage:
    uvicorn solarshade.api.main:app --reload --port 8000
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..analysis.irradiance import daily_total_kwh, get_hourly_irradiance
from ..analysis.obstacles import estimate_common_obstacles
from ..analysis.shading_solar import analyze_annual_shading
from ..analysis.tilt import get_optimal_tilt
from ..core.config import settings
from ..core.models import LocationType, ObstacleType, RoofFootprint, ShadingObstacle
from ..geometry.shadow import horizon_profile
from ..geometry.solar_position import get_solar_position
from ..utils.logging_config import ensure_logging
from ..utils.validation import InvalidInputError

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class ObstacleModel(BaseModel):
    """A shading obstacle near the roof."""
    category: ObstacleType = Field(..., description="building, tree, terrain or structure")
    height: float = Field(..., description="Height above roof level (m)", examples=[15.0])
    distance: float = Field(..., description="Distance from the roof edge (m)", examples=[10.0])
    azimuth: float = Field(..., description="Bearing from the roof, 0 = north", examples=[180.0])
    width: Optional[float] = Field(None, description="Width across the bearing (m)")
    description: str = ""

    def to_obstacle(self) -> ShadingObstacle:
        return ShadingObstacle(
            category=self.category,
            height=self.height,
            distance=self.distance,
            azimuth=self.azimuth,
            width=self.width,
            description=self.description,
        )


class RoofModel(BaseModel):
    """Rectangular roof footprint."""
    width: float = Field(20.0, description="East-west extent (m)")
    depth: float = Field(20.0, description="North-south extent (m)")


class SolarPositionRequest(BaseModel):
    """Request for the sun position at a place and local time."""
    latitude: float = Field(..., examples=[55.6])
    longitude: float = Field(..., examples=[12.6])
    timestamp: str = Field(..., description="ISO-8601 local time", examples=["2024-06-21T12:00:00"])
    timezone: Optional[float] = Field(None, description="Hours from UTC; defaults to the timestamp offset")


class HourlyIrradianceRequest(BaseModel):
    """Request for a synthesized hourly irradiance curve."""
    latitude: float
    longitude: float
    date: str = Field(..., description="ISO-8601 date", examples=["2024-06-21"])
    daily_total: float = Field(..., description="Daily irradiation (kWh/m²/day)", examples=[5.2])
    avg_temperature: Optional[float] = Field(None, description="Average temperature (°C)")
    timezone: float = Field(0.0, description="Hours from UTC of the hour labels")


class ShadingAnalysisRequest(BaseModel):
    """Request for an annual shading analysis."""
    latitude: float
    longitude: float
    obstacles: Optional[List[ObstacleModel]] = Field(
        None, description="Surveyed obstacles; estimated from location_type when omitted"
    )
    location_type: Optional[LocationType] = Field(None, description="urban, suburban or rural")
    building_height: Optional[float] = Field(None, description="Nearby building height (m)")
    roof: RoofModel = Field(default_factory=RoofModel)


class ObstacleEstimateRequest(BaseModel):
    """Request for typical obstacles of a location class."""
    location_type: str = Field(..., examples=["urban"])
    building_height: Optional[float] = None


class HorizonRequest(BaseModel):
    """Request for the horizon profile of an obstacle set."""
    obstacles: List[ObstacleModel] = Field(default_factory=list)
    step_deg: float = Field(10.0, description="Azimuth bin size (degrees)")


def _obstacle_dict(obstacle: ShadingObstacle) -> Dict[str, Any]:
    data = asdict(obstacle)
    data["category"] = obstacle.category.value
    data["angular_elevation"] = obstacle.angular_elevation
    return data


# =============================================================================
# APP
# =============================================================================

ensure_logging()

app = FastAPI(
    title="Solarshade API",
    description="Solar geometry and roof shading estimates",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "field": exc.field,
            "suggestions": exc.suggestions,
        },
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/", tags=["General"])
async def root():
    """API info and health check."""
    return {
        "name": "Solarshade API",
        "version": __version__,
        "description": "Solar geometry and roof shading estimates",
        "status": "healthy",
        "endpoints": {
            "solar_position": "POST /solar/position",
            "hourly_irradiance": "POST /solar/hourly",
            "optimal_tilt": "GET /solar/tilt",
            "shading_analysis": "POST /shading/analyze",
            "obstacle_estimate": "POST /shading/obstacles",
            "horizon_profile": "POST /shading/horizon",
        },
        "documentation": "/docs",
    }


@app.get("/health", tags=["General"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/solar/position", tags=["Solar"])
async def solar_position(request: SolarPositionRequest):
    """Sun elevation and azimuth for a location and local time."""
    position = get_solar_position(
        request.latitude,
        request.longitude,
        request.timestamp,
        request.timezone,
    )
    return {**asdict(position), "is_daylight": position.is_daylight}


@app.post("/solar/hourly", tags=["Solar"])
async def hourly_irradiance(request: HourlyIrradianceRequest):
    """24 hourly GHI/DNI/DHI/temperature values for a representative day."""
    hourly = get_hourly_irradiance(
        request.latitude,
        request.longitude,
        request.date,
        request.daily_total,
        avg_temperature=request.avg_temperature,
        timezone=request.timezone,
    )
    return {
        "date": request.date,
        "daily_total": daily_total_kwh(hourly),
        "hours": [asdict(sample) for sample in hourly],
    }


@app.get("/solar/tilt", tags=["Solar"])
async def optimal_tilt(latitude: float, month: Optional[int] = None):
    """Optimal fixed-panel tilt, annual or for one month."""
    return {
        "latitude": latitude,
        "month": month,
        "optimal_tilt": get_optimal_tilt(latitude, month),
    }


@app.post("/shading/analyze", tags=["Shading"])
async def shading_analysis(request: ShadingAnalysisRequest):
    """
    Annual shading analysis of a roof.

    Obstacles come from the request, or from the location class estimate
    when only location_type is given. With neither the site is unobstructed.
    """
    if request.obstacles is not None:
        obstacles = [obstacle.to_obstacle() for obstacle in request.obstacles]
    elif request.location_type is not None:
        obstacles = estimate_common_obstacles(request.location_type, request.building_height)
    else:
        obstacles = []

    analysis = analyze_annual_shading(
        request.latitude,
        request.longitude,
        obstacles,
        RoofFootprint(width=request.roof.width, depth=request.roof.depth),
    )
    return {
        **analysis.to_dict(),
        "obstacles": [_obstacle_dict(obstacle) for obstacle in obstacles],
    }


@app.post("/shading/obstacles", tags=["Shading"])
async def obstacle_estimate(request: ObstacleEstimateRequest):
    """Typical obstacles for an urban, suburban or rural site."""
    obstacles = estimate_common_obstacles(request.location_type, request.building_height)
    return {
        "location_type": request.location_type,
        "obstacles": [_obstacle_dict(obstacle) for obstacle in obstacles],
    }


@app.post("/shading/horizon", tags=["Shading"])
async def horizon(request: HorizonRequest):
    """Highest obstacle elevation per azimuth bin."""
    profile = horizon_profile(
        [obstacle.to_obstacle() for obstacle in request.obstacles],
        step_deg=request.step_deg,
    )
    return {"profile": [asdict(point) for point in profile]}


# =============================================================================
# CLI ENTRY POINT
# =============================================================================

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "solarshade.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
