"""
Basic squash example

Serves a few endpoints showing when responses get compressed.
"""
from pathlib import Path

from fastapi.responses import PlainTextResponse, StreamingResponse

from squash import create_app, set_compression, Request, Response

app = create_app(
    title="squash example",
    threshold="1kb",
    json_spaces=2,
)

@app.get("/text", response_class=PlainTextResponse)
async def text():
    """Large text, compressed."""
    return "lorem ipsum " * 500

@app.get("/small", response_class=PlainTextResponse)
async def small():
    """Below the threshold, sent as is."""
    return "tiny"

@app.get("/binary")
async def binary(request: Request):
    """Binary content is not in the filter; force it."""
    set_compression(request, True)
    return Response(bytes(range(256)) * 16, media_type="application/octet-stream")

@app.get("/source")
async def source():
    """Stream this file, compressed as it is read."""
    def chunks():
        with open(Path(__file__), "rb") as f:
            while chunk := f.read(1024):
                yield chunk
    return StreamingResponse(chunks(), media_type="text/x-python")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
