"""
Purpose: Map navigation endpoints - boundary checks, clamping, obstacles, pathfinding.
Dependencies: hexnav/pathfinding/pathfinder.py, flask.
Ext Hooks: Batch path requests for whole squads.
Server Only: One Pathfinder per app, stored in app.extensions['pathfinder'].
"""
import logging
import math

from flask import Blueprint, current_app, request, jsonify

logger = logging.getLogger(__name__)

bp = Blueprint('map', __name__)


class InvalidRequest(Exception):
    pass


def _pathfinder():
    return current_app.extensions['pathfinder']


def _is_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integer literal too large for a float
        return False


def _number(data, key):
    value = data.get(key)
    if not _is_number(value):
        raise InvalidRequest(f"'{key}' must be a finite number")
    return float(value)


def _point(data, key):
    value = data.get(key)
    if not isinstance(value, (list, tuple)) or len(value) != 3 or not all(_is_number(v) for v in value):
        raise InvalidRequest(f"'{key}' must be [x, y, z] of finite numbers")
    return tuple(float(v) for v in value)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Invalid data")
    return data


@bp.errorhandler(InvalidRequest)
def handle_bad_request(error):
    logger.warning("Rejected %s: %s", request.path, error)
    return jsonify({"error": str(error)}), 400


@bp.route("/api/valid_position", methods=["POST"])
def handle_valid_position():
    data = _json_body()
    x, z = _number(data, 'x'), _number(data, 'z')
    return jsonify({"valid": _pathfinder().is_valid_position(x, z)})


@bp.route("/api/clamp", methods=["POST"])
def handle_clamp():
    data = _json_body()
    x, z = _pathfinder().clamp_to_hexagon(_number(data, 'x'), _number(data, 'z'))
    return jsonify({"x": x, "z": z})


@bp.route("/api/obstacle", methods=["POST"])
def handle_obstacle():
    data = _json_body()
    x, z, radius = _number(data, 'x'), _number(data, 'z'), _number(data, 'radius')
    try:
        blocked = _pathfinder().set_obstacle(x, z, radius)
    except ValueError as e:
        raise InvalidRequest(str(e)) from e
    return jsonify({"blocked_cells": blocked})


@bp.route("/api/find_path", methods=["POST"])
def handle_find_path():
    data = _json_body()
    start, end = _point(data, 'start'), _point(data, 'end')
    result = _pathfinder().find_path_result(start, end)
    return jsonify({
        "path": [list(p) for p in result.path],
        "status": result.status.value,
    })
