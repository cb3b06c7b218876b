"""
JSON Inspector - FastAPI application
HTTP entry point wrapping the inspector adapter.
"""

import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .adapters.inspector_adapter import InspectorAdapter
from .config import settings
from .models.api_models import InspectRequest, InspectResponse
from .models.elements import ElementInstance
from .services.logging_service import logging_service
from .services.metrics_service import metrics_service

# Create FastAPI app
app = FastAPI(
    title="JSON Inspector",
    description="Reconstruct geometry elements from untyped JSON payloads",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container monitoring."""
    return {"status": "healthy", "service": "jsoninspector"}


@app.post("/inspect", response_model=InspectResponse)
def inspect_payload(request: InspectRequest):
    """Inspect a JSON payload. Always succeeds; problems are reported as warnings."""
    request_id = logging_service.new_run_id()
    start_time = time.time()

    logging_service.log_api_request(
        request_id=request_id,
        method="POST",
        path="/inspect",
        payload_size=len(request.json_text)
    )

    # One adapter per request keeps the marker cache and material stream per call
    inspector = InspectorAdapter(settings)
    with metrics_service.measure_time("inspect", {'request_id': request_id}):
        outputs = inspector.inspect(request.json_text)

    response = InspectResponse(
        entities=[entity.to_json_dict() for entity in outputs.entities],
        definitions=referenced_definitions(outputs.entities),
        warnings=outputs.warnings,
        entity_count=len(outputs.entities),
        warning_count=len(outputs.warnings),
        summary=inspector.get_processing_summary()
    )

    logging_service.log_api_response(
        request_id=request_id,
        status_code=200,
        duration_ms=int((time.time() - start_time) * 1000),
        entity_count=response.entity_count,
        warning_count=response.warning_count
    )
    return response


def referenced_definitions(entities) -> list:
    """Serialized definitions of every instance, each listed once."""
    definitions = {}
    for entity in entities:
        if isinstance(entity, ElementInstance):
            definition = entity.base_definition
            definitions.setdefault(definition.id, definition.to_json_dict())
    return list(definitions.values())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
