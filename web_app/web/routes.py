"""Web interface routes implementation."""

from html import escape

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortlinks.errors import (
    CodeGenerationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..links import short_url_for, visitor_from_request

router = APIRouter()


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""

FORM_BODY = """<h1>Shorten a link</h1>
<form method="post" action="create">
  <input type="url" name="url" placeholder="https://example.com/long/path" required>
  <input type="text" name="custom_code" placeholder="custom code (optional)">
  <button type="submit">Shorten</button>
</form>"""


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        content=PAGE_TEMPLATE.format(title=escape(title), body=body),
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the form that submits a URL."""
    return _page("Short Links", FORM_BODY)


@router.post("/create", response_class=HTMLResponse, include_in_schema=False)
async def create_short_url_web(
    request: Request,
    url: str = Form(""),
    custom_code: str = Form(None),
):
    """Handle form submission to create short URL."""
    registry = request.app.state.registry
    
    # Empty form field means "generate one"
    custom_code = custom_code.strip() if custom_code and custom_code.strip() else None
    
    try:
        mapping, _ = await registry.create(url.strip(), custom_code=custom_code)
    except ValidationError as e:
        return _error_page(str(e), status.HTTP_400_BAD_REQUEST)
    except ConflictError as e:
        return _error_page(str(e), status.HTTP_409_CONFLICT)
    except CodeGenerationError as e:
        return _error_page(str(e), status.HTTP_503_SERVICE_UNAVAILABLE)
    
    # Relative redirect so it works with or without a proxy path prefix
    return RedirectResponse(
        url=f"result/{mapping.short_code}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/result/{short_code}", response_class=HTMLResponse, include_in_schema=False)
async def result_page(request: Request, short_code: str):
    """Show result page with short URL and current click count."""
    registry = request.app.state.registry
    
    try:
        mapping = await registry.get_stats(short_code)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    
    short_url = escape(short_url_for(request, mapping.short_code))
    original_url = escape(mapping.original_url)
    body = (
        f"<h1>Your short link</h1>"
        f"<p><a href=\"{short_url}\">{short_url}</a></p>"
        f"<p>Points to: <a href=\"{original_url}\">{original_url}</a></p>"
        f"<p>Clicks: {mapping.clicks}</p>"
        f"<p><a href=\"../\">Shorten another</a></p>"
    )
    return _page("Short link created", body)


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting the click."""
    registry = request.app.state.registry
    
    try:
        mapping = await registry.resolve(short_code, visitor=visitor_from_request(request))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    
    # 302 so browsers keep coming back and every click is counted
    return RedirectResponse(url=mapping.original_url, status_code=status.HTTP_302_FOUND)


def _error_page(message: str, status_code: int) -> HTMLResponse:
    body = f"<h1>Error</h1><p>{escape(message)}</p><p><a href=\".\">Go back</a></p>"
    return _page("Error", body, status_code=status_code)
