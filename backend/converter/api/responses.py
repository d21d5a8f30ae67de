"""JSON bodies returned by the upload endpoint."""
from fastapi.responses import JSONResponse

from converter.conversion.models import ConvertedFileResult

SUCCESS_MESSAGE = "Files converted successfully"
BATCH_ERROR = "Error processing files"
INTERNAL_ERROR_DETAILS = "Internal server error"


def success(results: list[ConvertedFileResult]) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={"message": SUCCESS_MESSAGE, "files": [r.to_dict() for r in results]},
    )


def validation_error(reason: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": reason})


def batch_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": BATCH_ERROR, "details": message})
