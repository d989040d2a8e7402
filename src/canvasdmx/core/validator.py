"""
JSON schema validator for LED point files
"""
import json

from jsonschema import Draft7Validator

MAX_REPORTED_ERRORS = 5

# Export format for LED maps
POINTS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "LED Points Export",
    "description": "LED mapping points with canvas information",
    "type": "object",
    "required": ["canvas", "objects"],
    "properties": {
        "canvas": {
            "type": "object",
            "description": "Canvas dimensions",
            "required": ["width", "height"],
            "properties": {
                "width": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 10000,
                    "description": "Canvas width in pixels"
                },
                "height": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 10000,
                    "description": "Canvas height in pixels"
                }
            },
            "additionalProperties": False
        },
        "objects": {
            "type": "array",
            "description": "Groups of points (fixtures, shapes)",
            "minItems": 0,
            "items": {
                "type": "object",
                "required": ["points"],
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "points": {
                        "type": "array",
                        "minItems": 0,
                        "items": {
                            "type": "object",
                            "required": ["x", "y"],
                            "properties": {
                                "id": {
                                    "type": "integer",
                                    "minimum": 0,
                                    "description": "LED index"
                                },
                                "x": {"type": "integer", "minimum": 0},
                                "y": {"type": "integer", "minimum": 0}
                            },
                            "additionalProperties": False
                        }
                    }
                },
                "additionalProperties": True
            }
        }
    },
    "additionalProperties": False
}


def validate_points_json(data):
    """
    Validate point data against POINTS_SCHEMA, then check every point lies
    inside the canvas.

    Args:
        data: Parsed JSON

    Returns:
        tuple: (is_valid: bool, message: str, errors: list)
    """
    validator = Draft7Validator(POINTS_SCHEMA)
    errors = list(validator.iter_errors(data))

    if errors:
        error_messages = []
        for error in errors[:MAX_REPORTED_ERRORS]:
            path = '.'.join(str(p) for p in error.path) if error.path else 'root'
            error_messages.append(f"{path}: {error.message}")
        if len(errors) > MAX_REPORTED_ERRORS:
            error_messages.append(f"... and {len(errors) - MAX_REPORTED_ERRORS} more errors")
        return False, "Schema validation failed", error_messages

    canvas = data['canvas']
    outside = []
    for obj_idx, obj in enumerate(data['objects']):
        for point_idx, point in enumerate(obj.get('points', [])):
            if point['x'] >= canvas['width'] or point['y'] >= canvas['height']:
                outside.append((obj_idx, point_idx, point['x'], point['y']))

    if outside:
        error_msgs = [
            f"Object {o}, point {p}: ({x},{y}) outside canvas ({canvas['width']}x{canvas['height']})"
            for o, p, x, y in outside[:MAX_REPORTED_ERRORS]
        ]
        if len(outside) > MAX_REPORTED_ERRORS:
            error_msgs.append(f"... and {len(outside) - MAX_REPORTED_ERRORS} more points outside")
        return False, "Points outside canvas bounds", error_msgs

    total_points = sum(len(obj.get('points', [])) for obj in data['objects'])
    return True, f"Valid ({total_points} points in {len(data['objects'])} objects)", []


def validate_points_file(file_path):
    """
    Load and validate a points JSON file.

    Returns:
        tuple: (is_valid: bool, message: str, errors: list, data: dict or None)
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return False, f"File not found: {file_path}", [], None
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON: {e}", [], None

    is_valid, message, errors = validate_points_json(data)
    return is_valid, message, errors, data if is_valid else None


def export_points(led_map, name="leds"):
    """
    Export an LedMap in the POINTS_SCHEMA format. Unmapped LEDs are skipped;
    each point keeps its LED index as 'id'.
    """
    points = []
    for index, position in enumerate(led_map.positions()):
        if position is None:
            continue
        points.append({'id': index, 'x': position[0], 'y': position[1]})

    return {
        'canvas': {'width': led_map.canvas_width, 'height': led_map.canvas_height},
        'objects': [{'id': name, 'points': points}],
    }
