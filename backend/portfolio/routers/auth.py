from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse

from ..auth import SESSION_KEY, is_admin_session
from ..services.auth_service import AuthService


router = APIRouter()


@router.get("/admin/login")
def login_page(request: Request):
    # already signed in: straight to the dashboard
    if is_admin_session(request):
        return RedirectResponse(url="/admin", status_code=302)
    templates = request.app.state.templates
    return templates.TemplateResponse(request, "admin/login.html", {"error": None})


@router.post("/admin/login")
def login(request: Request, password: str = Form(...)):
    templates = request.app.state.templates
    if not AuthService().authenticate(password):
        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {"error": "Incorrect password"},
            status_code=400,
        )
    request.session[SESSION_KEY] = True
    return RedirectResponse(url="/admin", status_code=303)


@router.get("/admin/logout")
def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/", status_code=302)
