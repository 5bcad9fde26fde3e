# fintrack/api/routes/pages.py
# Placeholder pages. The guard middleware decides who may reach them.
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from fintrack.core.config import settings

router = APIRouter(include_in_schema=False)

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title} - {app_name}</title>
</head>
<body>
    <h1>{title}</h1>
    <p>{body}</p>
</body>
</html>
"""

def render_page(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(PAGE_TEMPLATE.format(title=title, body=body, app_name=settings.APP_NAME))

@router.get("/", response_class=HTMLResponse)
async def dashboard_page():
    return render_page("Dashboard", "Your latest transactions.")

@router.get("/transactions", response_class=HTMLResponse)
async def transactions_page():
    return render_page("Transactions", "Filter your history by date range and category.")

@router.get("/categories", response_class=HTMLResponse)
async def categories_page():
    return render_page("Categories", "Income and expense categories.")

@router.get("/signin", response_class=HTMLResponse)
async def signin_page():
    return render_page("Sign in", "Sign in with your e-mail and password.")

@router.get("/signup", response_class=HTMLResponse)
async def signup_page():
    return render_page("Sign up", "Create an account to start tracking.")
