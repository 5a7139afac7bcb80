import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import HTMLResponse, Response
from starlette.routing import Route

from app import config
from app.deps import favorites_store, recipe_source, remix_client
from domain import services
from domain.errors import (
    EmptySession,
    NetworkError,
    RecipeNotFound,
    RecipeRemixError,
    RemixError,
    Superseded,
)
from domain.mealdb import MealDBClient
from domain.remix import RemixClient
from domain.session import SessionState


logger = logging.getLogger(__name__)


CONFIG = config.Config()


TEMPLATES = Environment(
    loader=FileSystemLoader(CONFIG.html_dir),
    autoescape=select_autoescape(default=True),
)


STATUS_CODES: dict[type[Exception], int] = {
    RecipeNotFound: 404,
    NetworkError: 502,
    RemixError: 502,
    EmptySession: 409,
}


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def render(name: str, **context: Any) -> str:
    return TEMPLATES.get_template(name).render(**context)


def render_message(message: str, *, kind: str = "error") -> str:
    return render("message.html", message=message, kind=kind)


def render_favorites(request: Request, notice: str = "") -> str:
    names = services.list_saved(favorites=request.app.state.favorites)
    return render("favorites.html", names=names, notice=notice)


def render_recipe(request: Request) -> str:
    session: SessionState = request.app.state.session
    recipe = session.get()
    return render(
        "recipe.html",
        recipe=None if recipe is None else recipe.to_dict(),
        oob=True,
    )


async def form_value(request: Request, key: str) -> str:
    async with request.form() as form:
        value = form.get(key, "")
    if not isinstance(value, str):
        raise HTTPException(400, f"{key} must be text.")
    return value


async def domain_error(request: Request, exc: Exception) -> Response:
    if isinstance(exc, Superseded):
        # A later load owns the display, leave it alone.
        return Response(status_code=204)
    code = 500
    for kind in type(exc).__mro__:
        if kind in STATUS_CODES:
            code = STATUS_CODES[kind]
            break
    logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return HTMLResponse(render_message(services.message_for(exc)), status_code=code)


async def bad_input(request: Request, exc: Exception) -> Response:
    return HTMLResponse(render_message(str(exc)), status_code=400)


@aHTMLResponse
async def homepage(request: Request) -> str:
    session: SessionState = request.app.state.session
    error = ""
    if session.get() is None:
        # First visit shows a recipe straight away.
        try:
            await services.load_random(session=session, source=request.app.state.source)
        except (NetworkError, Superseded) as e:
            error = services.message_for(e)
    recipe = session.get()
    return render(
        "index.html",
        recipe=None if recipe is None else recipe.to_dict(),
        remix=session.remix,
        names=services.list_saved(favorites=request.app.state.favorites),
        themes=CONFIG.themes,
        error=error,
    )


@aHTMLResponse
async def random_recipe(request: Request) -> str:
    await services.load_random(
        session=request.app.state.session,
        source=request.app.state.source,
    )
    return render_recipe(request)


@aHTMLResponse
async def search_recipe(request: Request) -> str:
    name = await form_value(request, "name")
    await services.load_by_name(
        name,
        session=request.app.state.session,
        source=request.app.state.source,
    )
    return render_recipe(request)


@aHTMLResponse
async def remix(request: Request) -> str:
    theme = await form_value(request, "theme")
    result = await services.remix_current(
        theme,
        session=request.app.state.session,
        remixer=request.app.state.remixer,
    )
    return render("remix.html", remix=result, remix_html=Markup(result.html))


@aHTMLResponse
async def favorites(request: Request) -> str:
    return render_favorites(request)


@aHTMLResponse
async def save_favorite(request: Request) -> str:
    result = services.save_current(
        session=request.app.state.session,
        favorites=request.app.state.favorites,
    )
    return render_favorites(request, notice=services.message_for(result))


@aHTMLResponse
async def load_favorite(request: Request) -> str:
    name = await form_value(request, "name")
    await services.load_by_name(
        name,
        session=request.app.state.session,
        source=request.app.state.source,
    )
    return render_recipe(request)


@aHTMLResponse
async def delete_favorite(request: Request) -> str:
    name = request.path_params["name"]
    result = services.delete_saved(name, favorites=request.app.state.favorites)
    return render_favorites(request, notice=services.message_for(result))


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    logging.basicConfig(level=CONFIG.log_level)
    if CONFIG.api_key is None:
        logger.warning("OPENAI_API_KEY is not set, remixes will fail.")
    yield
    source: MealDBClient = app.state.source
    remixer: RemixClient = app.state.remixer
    await source.close()
    await remixer.close()


app = Starlette(
    debug=True if CONFIG.env == config.Env.local else False,
    routes=[
        Route("/", homepage),
        Route("/recipes/random", random_recipe, methods=["POST"]),
        Route("/recipes/search", search_recipe, methods=["POST"]),
        Route("/remix", remix, methods=["POST"]),
        Route("/favorites", favorites, methods=["GET"]),
        Route("/favorites", save_favorite, methods=["POST"]),
        Route("/favorites/load", load_favorite, methods=["POST"]),
        Route("/favorites/{name:path}", delete_favorite, methods=["DELETE"]),
    ],
    exception_handlers={
        RecipeRemixError: domain_error,
        ValueError: bad_input,
    },
    lifespan=lifespan,
)

app.state.session = SessionState()
app.state.source = recipe_source(CONFIG)
app.state.remixer = remix_client(CONFIG)
app.state.favorites = favorites_store(CONFIG)
