"""
project: mazegen
module: maze_api.py
License: MIT

Maze generation API routes.

Every request runs the generator from scratch; the newest result is
published as the app's latest snapshot so a viewer polling
``/api/maze/latest`` always gets one complete layout.
"""

from dataclasses import asdict

from flask import Blueprint, Response, current_app, jsonify, request

from mazegen.generator import (
    CELL_SIZE_PRESETS,
    ConfigurationError,
    GenerationResult,
    GridContext,
    generate,
    resolve_cell_size,
)
from mazegen.generator.config import DEFAULT_VIEWPORT_HEIGHT, DEFAULT_VIEWPORT_WIDTH
from mazegen.logging_utils import get_logger
from mazegen.seeds import coerce_seed

log = get_logger("mazegen.api")

bp_maze = Blueprint("maze", __name__)


class BadParameter(ValueError):
    pass


@bp_maze.errorhandler(ConfigurationError)
@bp_maze.errorhandler(BadParameter)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


def _params() -> dict:
    """Merge query/form values with a JSON body (body wins)."""
    params = request.values.to_dict()
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        params.update(body)
    return params


def _int_param(params: dict, name: str, default: int | None) -> int | None:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise BadParameter(f"{name} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BadParameter(f"{name} must be an integer, got {raw!r}") from None


def _flag_param(params: dict, name: str, default: bool) -> bool:
    raw = params.get(name)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).lower() not in {"0", "false", "no", ""}


def _resolve_grid(params: dict) -> tuple[GridContext, int]:
    """Grid from explicit columns/rows, else from a viewport and size preset."""
    cell_size = resolve_cell_size(params.get("size") or params.get("cell_size"))
    columns = _int_param(params, "columns", None)
    rows = _int_param(params, "rows", None)
    if columns is not None or rows is not None:
        if columns is None or rows is None:
            raise BadParameter("columns and rows must be given together")
        grid = GridContext(columns, rows)
    else:
        width = _int_param(params, "viewport_width", DEFAULT_VIEWPORT_WIDTH)
        height = _int_param(params, "viewport_height", DEFAULT_VIEWPORT_HEIGHT)
        grid = GridContext.from_viewport(width, height, cell_size)
    limit = current_app.config["MAZEGEN_MAX_GRID"]
    if grid.columns > limit or grid.rows > limit:
        raise ConfigurationError(f"grid {grid.columns}x{grid.rows} exceeds the {limit} cells per axis limit")
    return grid, cell_size


def _run_from_request() -> tuple[GenerationResult, int]:
    params = _params()
    cfg = current_app.config
    rooms = _int_param(params, "rooms", cfg["MAZEGEN_DEFAULT_ROOMS"])
    if rooms > cfg["MAZEGEN_MAX_ROOMS"]:
        raise ConfigurationError(f"rooms must be <= {cfg['MAZEGEN_MAX_ROOMS']}, got {rooms}")
    try:
        seed = coerce_seed(params.get("seed"))
    except TypeError as e:
        raise BadParameter(str(e)) from None
    grid, cell_size = _resolve_grid(params)
    result = generate(
        grid,
        rooms,
        config=cfg["MAZEGEN_GENERATOR"],
        seed=seed,
        strict=_flag_param(params, "strict", cfg["MAZEGEN_STRICT"]),
    )
    log.bind(route=request.path).info(
        event="maze_generated",
        seed=seed,
        columns=grid.columns,
        rows=grid.rows,
        rooms_requested=rooms,
        rooms_placed=len(result.rooms),
        doors=len(result.doors),
        runtime_ms=result.metrics.get("runtime_ms"),
    )
    publish_snapshot(result, cell_size)
    return result, cell_size


def publish_snapshot(result: GenerationResult, cell_size: int) -> None:
    state = current_app.extensions["mazegen"]
    with state["lock"]:
        state["latest"] = (result, cell_size)


def latest_snapshot() -> tuple[GenerationResult, int] | None:
    state = current_app.extensions["mazegen"]
    with state["lock"]:
        return state["latest"]


def _payload(result: GenerationResult, cell_size: int) -> dict:
    data = result.to_json(cell_size=cell_size)
    data["cell_size"] = cell_size
    return data


@bp_maze.route("/api/maze", methods=["GET", "POST"])
def maze():
    """Generate a maze.

    Params (query, form or JSON, all optional):
      rooms, seed, columns + rows | size + viewport_width + viewport_height, strict
    Response: { seed, columns, rows, cell_size, rooms, corridors, doors, edges, metrics }
    """
    result, cell_size = _run_from_request()
    return jsonify(_payload(result, cell_size))


@bp_maze.route("/api/maze/ascii", methods=["GET", "POST"])
def maze_ascii():
    result, _cell_size = _run_from_request()
    return Response(result.to_ascii() + "\n", mimetype="text/plain")


@bp_maze.route("/api/maze/latest")
def maze_latest():
    snapshot = latest_snapshot()
    if snapshot is None:
        return jsonify({"error": "no maze generated yet"}), 404
    result, cell_size = snapshot
    return jsonify(_payload(result, cell_size))


@bp_maze.route("/api/maze/config")
def maze_config():
    cfg = current_app.config
    return jsonify(
        {
            "generator": asdict(cfg["MAZEGEN_GENERATOR"]),
            "size_presets": CELL_SIZE_PRESETS,
            "default_rooms": cfg["MAZEGEN_DEFAULT_ROOMS"],
            "max_rooms": cfg["MAZEGEN_MAX_ROOMS"],
            "max_grid": cfg["MAZEGEN_MAX_GRID"],
            "default_viewport": {"width": DEFAULT_VIEWPORT_WIDTH, "height": DEFAULT_VIEWPORT_HEIGHT},
        }
    )
