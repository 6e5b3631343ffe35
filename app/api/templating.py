from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ADMIN_NAVIGATION = [
    {"name": "Dashboard", "icon": "home", "path": "/admin"},
    {"name": "Cities", "icon": "map-pin", "path": "/admin/cities"},
    {"name": "Dishes", "icon": "utensils", "path": "/admin/dishes"},
    {"name": "Restaurants", "icon": "store", "path": "/admin/restaurants"},
    {"name": "Reviews", "icon": "star", "path": "/admin/reviews"},
    {"name": "Users", "icon": "users", "path": "/admin/users"},
]

templates.env.globals["admin_navigation"] = ADMIN_NAVIGATION
