"""FastAPI + Tailwind interface for annotating documents in the browser.

Run with:
    uvicorn docman.web:app --reload
"""
from __future__ import annotations

from html import escape
from typing import Any

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .app import DocumentManager
from .config import Settings
from .errors import DocmanError
from .lookup import MetadataLookupClient

app = FastAPI(title="docman", description="Append a bibliography to documents with [id] markers")


class RenderRequest(BaseModel):
    citations: Any
    text: str
    strict: bool = False


class RenderResponse(BaseModel):
    output: str


def _build_manager(strict: bool = False) -> DocumentManager:
    return DocumentManager(lookup=MetadataLookupClient(Settings.from_env()), strict=strict)


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>docman</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">docman</h1>
                <p class=\"text-gray-600 mt-2\">Paste citation JSON and a document containing [id] markers to get the document back with its reference list.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _form_page(
    output: str | None = None,
    error: str | None = None,
    citations: str = "",
    text: str = "",
) -> str:
    """Render the submission form with an optional result or error block."""

    form = f"""
    <form action=\"/render\" method=\"post\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"citations\">Citations (JSON)</label>
        <textarea name=\"citations\" required class=\"w-full h-36 border border-gray-300 rounded-md p-3 text-sm font-mono\">{escape(citations)}</textarea>
        <label class=\"block text-sm font-medium text-gray-700 mt-4 mb-2\" for=\"text\">Document text</label>
        <textarea name=\"text\" required placeholder=\"See [id1] for details.\" class=\"w-full h-44 border border-gray-300 rounded-md p-3 text-sm\">{escape(text)}</textarea>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Build references</button>
    </form>
    """

    result_block = ""
    if output is not None:
        result_block = f"""
        <div class=\"mt-8\">
            <h2 class=\"text-xl font-semibold text-gray-800\">Result</h2>
            <pre class=\"mt-3 bg-gray-900 text-green-100 p-4 rounded-lg whitespace-pre-wrap text-sm\">{escape(output)}</pre>
        </div>
        """

    error_block = ""
    if error:
        error_block = f"""
        <div class=\"mt-8 bg-red-50 border border-red-200 text-red-800 rounded-lg p-4\">{escape(error)}</div>
        """

    return _layout(form + error_block + result_block)


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the submission form."""

    return HTMLResponse(_form_page())


@app.post("/render", response_class=HTMLResponse)
def render_form(citations: str = Form(...), text: str = Form(...)) -> HTMLResponse:
    """Annotate pasted text; failures are shown on the page with status 400."""

    try:
        manager = _build_manager()
        catalog = manager.load_catalog_text(citations)
        output = manager.annotate(text, catalog)
    except DocmanError as exc:
        return HTMLResponse(
            _form_page(error=str(exc), citations=citations, text=text), status_code=400
        )
    return HTMLResponse(_form_page(output=output, citations=citations, text=text))


@app.post("/api/render", response_model=RenderResponse)
def render_json(request: RenderRequest) -> RenderResponse:
    try:
        manager = _build_manager(strict=request.strict)
        catalog = manager.build_catalog(request.citations)
        output = manager.annotate(request.text, catalog)
    except DocmanError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RenderResponse(output=output)


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("docman.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
