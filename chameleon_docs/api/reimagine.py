"""AI rewrite endpoint.

``POST /api/reimagine`` streams the rewritten text back as ``text/plain``
with no envelope. Validation failures answer 400 and upstream failures 500,
both as ``{"error": ...}``. An upstream failure after streaming has begun
aborts the response body instead of ending it cleanly.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from ..exceptions import UpstreamError, ValidationError
from ..schemas.reimagine import ReimagineRequest
from ..services import reimagine_service

router = APIRouter(prefix="/api/reimagine", tags=["Reimagine"])


@router.post("")
def reimagine(body: ReimagineRequest):
    try:
        stream = reimagine_service.rewrite(
            body.content,
            mode=body.mode,
            prompt=body.prompt,
            simplification_level=body.simplification_level,
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except UpstreamError:
        return JSONResponse(status_code=500, content={"error": "Failed to process content"})

    return StreamingResponse(stream, media_type="text/plain; charset=utf-8")
