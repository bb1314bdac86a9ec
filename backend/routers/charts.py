from fastapi import APIRouter, Depends, HTTPException
from typing import Annotated
from datetime import datetime
import logging

from src.models.chart_models import (
    ChartDownloadResponse,
    ChartTypeInfo,
    ChartUrlResponse,
    DownloadChartRequest,
    GenerateChartRequest,
)
from src.models.errors import ChartError
from src.services.chart_tool_service import ChartToolService, get_chart_tool_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/charts",
    tags=["charts"]
)


def _to_http_exception(error: ChartError) -> HTTPException:
    status_code = 400 if error.invalid_params else 500
    return HTTPException(status_code=status_code, detail={"kind": error.kind, "message": error.message})


@router.post("/generate", response_model=ChartUrlResponse)
async def generate_chart(
    request: GenerateChartRequest,
    chart_service: Annotated[ChartToolService, Depends(get_chart_tool_service)]
):
    """
    Generate a QuickChart URL for a chart description
    """
    try:
        url = await chart_service.generate_chart(request.model_dump(exclude_none=True))
        return ChartUrlResponse(
            success=True,
            url=url,
            message="Chart URL generated successfully",
            timestamp=datetime.now()
        )
    except ChartError as e:
        logger.error(f"Error generating chart: {e.kind}: {e.message}")
        raise _to_http_exception(e)


@router.post("/download", response_model=ChartDownloadResponse)
async def download_chart(
    request: DownloadChartRequest,
    chart_service: Annotated[ChartToolService, Depends(get_chart_tool_service)]
):
    """
    Render a chart and save the image to a local file
    """
    try:
        saved_path = await chart_service.save_chart(request.config, request.outputPath)
        return ChartDownloadResponse(
            success=True,
            path=saved_path,
            message=f"Chart saved to {saved_path}",
            timestamp=datetime.now()
        )
    except ChartError as e:
        logger.error(f"Error downloading chart: {e.kind}: {e.message}")
        raise _to_http_exception(e)


@router.get("/tools")
def list_tools(chart_service: Annotated[ChartToolService, Depends(get_chart_tool_service)]):
    """List the chart tools with their input schemas"""
    return {"tools": chart_service.list_tools()}


@router.get("/types")
def list_chart_types(chart_service: Annotated[ChartToolService, Depends(get_chart_tool_service)]):
    """List supported chart types with an example description for each"""
    return {"types": [ChartTypeInfo(**chart) for chart in chart_service.list_chart_types()]}
