import os, datetime as dt
from flask import Flask, jsonify, request, abort #flask object, json responses and query args

import config
from logging_config import setup_logging
from services.aggregate import load_dataset
from services.errors import FormatError
from services.planner import first_window_for, plan_crossing

#serves the parsed crossing times to the planner page as json
app = Flask(__name__)
app.config["TIDES_OUTPUT_DIR"] = config.TIDES_OUTPUT_DIR
app.config["TIDES_FILE"] = config.TIDES_COMBINED_FILE


def dataset_path():
    return os.path.join(config.output_dir(app.config["TIDES_OUTPUT_DIR"]), app.config["TIDES_FILE"])


def get_dataset():
    #read on every request so a fresh parse shows up without a restart
    path = dataset_path()
    if not os.path.exists(path):
        abort(503, description="Tide data not available")
    return load_dataset(path)


def parse_date_key(value):
    try:
        return dt.date.fromisoformat(value.strip()).isoformat()
    except (TypeError, ValueError):
        abort(400, description=f"Expected a YYYY-MM-DD date, got {value!r}")


@app.errorhandler(400)
@app.errorhandler(404)
@app.errorhandler(503)
def json_error(err):
    return jsonify({"error": err.description}), err.code


@app.route("/")
def home():
    data = get_dataset()
    return jsonify({
        "lastUpdated": data.get("lastUpdated"),
        "source": data.get("source"),
        "months": data.get("months") or ([data["month"]] if data.get("month") else []),
        "totalDays": data.get("totalDays", len(data.get("data") or {})),
    })


@app.route("/api/tides/<date>")
def tides_for_date(date):
    key = parse_date_key(date)
    windows = (get_dataset().get("data") or {}).get(key)
    if not windows:
        abort(404, description=f"No safe crossing times for {key}")
    return jsonify({"date": key, "windows": windows})


@app.route("/api/plan")
def plan():
    #either ?date=YYYY-MM-DD to use the first window that day, or ?start=HH:MM&end=HH:MM
    start = request.args.get("start")
    end = request.args.get("end")
    date = request.args.get("date")

    if not (start and end):
        if not date:
            abort(400, description="Please give a date or both start and end times.")
        key = parse_date_key(date)
        window = first_window_for(get_dataset(), key)
        if not window:
            abort(404, description=f"No safe crossing times for {key}")
        start, end = window["start"], window["end"]

    try:
        result = plan_crossing(start, end)
    except FormatError as e:
        abort(400, description=str(e))
    if date:
        result["date"] = parse_date_key(date)
    return jsonify(result)


if __name__ == "__main__":
    setup_logging()
    app.run(debug=True)#runs the dev server on device
