"""
main.py — Algorithm Step Visualizer Flask App
===============================================
JSON API in front of the step engine.  A browser front-end (out of
scope here) draws whatever these routes return.

Routes:
  GET  /api/algorithms            – registry listing (?family=, ?tag=)
  GET  /api/structures            – current structure of every family
  POST /api/run                   – run an operation, load its log
  POST /api/playback/<action>     – play, pause, toggle, reset, step_forward,
                                    step_backward, skip_to_beginning,
                                    skip_to_end, tick, seek, speed
  GET  /api/state                 – playback state + projected visual state
  GET  /api/log                   – serialised steps of the current log
  POST /api/compare               – run two algorithms side by side
  POST /api/reset                 – back to the default structures

State management:
  Single session, single timeline: one module-level Recorder (and its
  PlaybackController) serves every request.  The controller has no
  scheduler here; the client calls /api/playback/tick on its own timer
  using the `interval` reported in the playback state.

Configuration (defaults below, overridden by STEPVIZ_* env vars):
  DEFAULT_SPEED   – initial speed multiplier
  STACK_CAPACITY  – capacity for stack_push / queue_enqueue
  LOG_LEVEL       – logging level when run as a script
"""

import logging
from typing import Optional

from flask import Flask, request, jsonify

from algorithms import (
    get_algorithm, list_algorithms, algorithms_by_family, algorithms_by_tag,
    GRAPH, BST, AVL,
)
from engine import PlaybackController, Recorder, compare
from engine.controller import SPEED_PRESETS
from structures.graph import Graph

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.update(
    DEFAULT_SPEED=1.0,
    STACK_CAPACITY=8,
    LOG_LEVEL="INFO",
)
app.config.from_prefixed_env("STEPVIZ")

recorder: Optional[Recorder] = None  # set by reset_session()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def reset_session() -> Recorder:
    """Replace the session Recorder (and its controller) with a fresh one."""
    global recorder
    if recorder is not None:
        recorder.controller.reset()
    controller = PlaybackController(speed=app.config["DEFAULT_SPEED"])
    recorder = Recorder(controller=controller, defaults={"capacity": app.config["STACK_CAPACITY"]})
    return recorder


reset_session()


def get_state() -> dict:
    """Return current playback + visual state as a dict."""
    c = recorder.controller
    step = c.current_step
    return {
        "algorithm":    c.log.algorithm,
        "failed":       c.log.failed,
        "playback":     c.state.to_dict(),
        "visual":       c.visual_state().to_dict(),
        "current_step": step.to_dict() if step else None,
    }


def coerce_data(family: str, data):
    """Turn JSON request data into the snapshot type a family expects."""
    if data is None:
        return None
    if family == GRAPH:
        if isinstance(data, dict):
            return Graph.from_dict(data)
        if isinstance(data, list):
            return Graph.from_edges([tuple(e) for e in data])
        raise TypeError("graph data must be an object or a list of [source, target, weight] triples")
    if family in (BST, AVL):
        raise TypeError(f"{family} data cannot be sent directly; build the tree with {family}_build")
    if not isinstance(data, list):
        raise TypeError(f"{family} data must be a list of values")
    return data


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


# ---------------------------------------------------------------------------
# API: Catalogue & structures
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    """Optional ?family=<family> and ?tag=<tag> narrow the listing."""
    algos = list_algorithms()
    family = request.args.get("family")
    if family:
        algos = [a for a in algorithms_by_family(family) if a in algos]
    tag = request.args.get("tag")
    if tag:
        algos = [a for a in algorithms_by_tag(tag) if a in algos]
    return jsonify({"algorithms": [a.to_dict() for a in algos]})


@app.route("/api/structures", methods=["GET"])
def api_structures():
    out = {}
    for family, snap in recorder.structures.items():
        out[family] = snap.to_dict() if hasattr(snap, "to_dict") else list(snap)
    return jsonify(out)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    reset_session()
    return jsonify(get_state())


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    body = _body()
    key = body.get("algo")
    info = get_algorithm(key) if isinstance(key, str) else None
    if info is None:
        return _error(f"Unknown algorithm: {key}")

    params = body.get("params") or {}
    if not isinstance(params, dict):
        return _error("params must be an object")

    try:
        data = coerce_data(info.family, body.get("data"))
        log = recorder.run_operation(key, data, **params)
    except (ValueError, TypeError, KeyError) as e:
        logger.info("rejected run of %s: %s", key, e)
        return _error(str(e))

    payload = get_state()
    payload.update({
        "result":      log.result,
        "total_steps": len(log),
        "metrics":     recorder.metrics.to_dict() if recorder.metrics else {},
        "pseudocode":  list(info.pseudocode),
    })
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
_SIMPLE_ACTIONS = {
    "play":              PlaybackController.play,
    "pause":             PlaybackController.pause,
    "toggle":            PlaybackController.toggle_play,
    "reset":             PlaybackController.reset,
    "step_forward":      PlaybackController.step_forward,
    "step_backward":     PlaybackController.step_backward,
    "skip_to_beginning": PlaybackController.skip_to_beginning,
    "skip_to_end":       PlaybackController.skip_to_end,
    "tick":              PlaybackController.tick,
}


@app.route("/api/playback/<action>", methods=["POST"])
def api_playback(action: str):
    c = recorder.controller
    body = _body()

    if action in _SIMPLE_ACTIONS:
        _SIMPLE_ACTIONS[action](c)
    elif action == "seek":
        if "index" not in body:
            return _error("seek needs an index")
        c.seek(body["index"])
    elif action == "speed":
        if "preset" in body:
            if not isinstance(body["preset"], str) or body["preset"] not in SPEED_PRESETS:
                return _error(f"Unknown speed preset: {body['preset']}")
            c.set_preset(body["preset"])
        elif "speed" in body:
            c.set_speed(body["speed"])
        else:
            return _error("speed needs a speed or a preset")
    else:
        return _error(f"Unknown playback action: {action}", 404)

    return jsonify(get_state())


@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(get_state())


@app.route("/api/log", methods=["GET"])
def api_log():
    return jsonify(recorder.export())


# ---------------------------------------------------------------------------
# API: Comparison mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    """
    Body: {"left": {"algo", "params"?}, "right": {...}, "data"?}
    Both runs read the same structure (the session's, or `data`) and use
    throwaway Recorders, so the session timeline is left alone.
    """
    body = _body()
    sides = []
    for side in ("left", "right"):
        side_req = body.get(side)
        if not isinstance(side_req, dict):
            return _error(f"{side} must be an object with an algo")
        info = get_algorithm(side_req.get("algo")) if isinstance(side_req.get("algo"), str) else None
        if info is None:
            return _error(f"Unknown algorithm: {side_req.get('algo')}")
        sides.append((info, side_req.get("params") or {}))

    if sides[0][0].family != sides[1][0].family:
        return _error("Both algorithms must work on the same kind of structure")

    runs = []
    try:
        data = coerce_data(sides[0][0].family, body.get("data"))
        for info, params in sides:
            rec = Recorder(defaults=recorder.defaults)
            rec.structures = dict(recorder.structures)
            rec.run_operation(info.key, data, **params)
            runs.append(rec)
    except (ValueError, TypeError, KeyError) as e:
        return _error(str(e))

    return jsonify(compare(runs[0], runs[1]).to_dict())


if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Algorithm Step Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
