"""
Form pages - plain HTML forms for registering and searching devices
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["Pages"])

_PAGE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: sans-serif;
            max-width: 480px;
            margin: 40px auto;
        }}
        label {{
            display: block;
            margin-top: 12px;
        }}
        input[type=text], textarea {{
            width: 100%;
        }}
        button {{
            margin-top: 16px;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    {form}
    <p><a href="/docs">API documentation</a></p>
</body>
</html>
"""

_REGISTER_FORM = """
    <form action="/register" method="post" enctype="multipart/form-data">
        <label>Name
            <input type="text" name="inventory_name" required>
        </label>
        <label>Description
            <textarea name="description" rows="4"></textarea>
        </label>
        <label>Photo
            <input type="file" name="photo" accept="image/*">
        </label>
        <button type="submit">Register</button>
    </form>
"""

_SEARCH_FORM = """
    <form action="/search" method="post">
        <label>Device ID
            <input type="text" name="id" required>
        </label>
        <label>
            <input type="checkbox" name="has_photo" value="true">
            Include photo
        </label>
        <button type="submit">Search</button>
    </form>
"""


@router.get("/RegisterForm.html", response_class=HTMLResponse)
async def register_form() -> HTMLResponse:
    """Serve the device registration form."""
    return HTMLResponse(_PAGE.format(title="Register device", form=_REGISTER_FORM))


@router.get("/SearchForm.html", response_class=HTMLResponse)
async def search_form() -> HTMLResponse:
    """Serve the device search form."""
    return HTMLResponse(_PAGE.format(title="Search device", form=_SEARCH_FORM))
