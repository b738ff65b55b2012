"""
API Gateway Lambda handler for the DogSteps application.

This Lambda function exposes the step estimation and activity aggregation
core over REST endpoints for the companion app. It handles breed lookups,
recording completed walks, and daily and weekly activity summaries, with
CORS support.

Functions:
    lambda_handler: Main entry point for API Gateway events
    _handle_health_check: Handle GET /health endpoint
    _handle_search_breeds: Handle GET /breeds endpoint
    _handle_get_breed: Handle GET /breeds/{name} endpoint
    _handle_create_walk: Handle POST /walks endpoint
    _handle_reset_walks: Handle DELETE /walks endpoint
    _handle_get_today: Handle GET /activity/today endpoint
    _handle_get_weekly: Handle GET /activity/weekly endpoint
    _create_response: Create standardized HTTP responses
    _handle_cors_preflight: Handle OPTIONS requests for CORS
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, Optional
from urllib.parse import unquote_plus

from pydantic import ValidationError

from ..errors import InvalidInputError
from ..models.profile import DogProfile
from ..services.activity_service import ActivityService
from ..services.breed_catalog import DEFAULT_BREED_NAME, BreedCatalog, load_catalog
from ..utils import log_error, log_event

ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
API_VERSION = "1.0.0"

# Loaded once per cold start and shared by every invocation
CATALOG: BreedCatalog = load_catalog()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for API Gateway events.

    Routes incoming HTTP requests to the appropriate handler functions
    based on the HTTP method and resource path.

    Args:
        event: API Gateway event containing HTTP request data
        context: AWS Lambda runtime context

    Returns:
        HTTP response dictionary with statusCode, headers, and body

    Event Structure:
        {
            "httpMethod": "GET|POST|DELETE|OPTIONS",
            "resource": "/health|/breeds|/breeds/{name}|/walks|/activity/today|/activity/weekly",
            "pathParameters": {"name": "Beagle"},
            "queryStringParameters": {"breed": "Beagle", "age": "4"},
            "body": "{\"humanSteps\": 4200}"
        }
    """
    try:
        _log_api_request(event)

        http_method = event.get("httpMethod", "").upper()
        resource = event.get("resource", "")
        path_params = event.get("pathParameters") or {}
        query_params = event.get("queryStringParameters") or {}

        if http_method == "OPTIONS":
            return _handle_cors_preflight()

        # Breed lookups only need the catalog
        if resource == "/breeds" and http_method == "GET":
            return _handle_search_breeds(CATALOG, query_params)

        if resource == "/breeds/{name}" and http_method == "GET":
            return _handle_get_breed(CATALOG, path_params.get("name"))

        try:
            activity_service = ActivityService(catalog=CATALOG)
        except Exception as e:
            return _create_error_response(500, "Service initialization failed", str(e))

        if resource == "/health" and http_method == "GET":
            return _handle_health_check(activity_service)

        elif resource == "/walks" and http_method == "POST":
            return _handle_create_walk(activity_service, event.get("body") or "")

        elif resource == "/walks" and http_method == "DELETE":
            return _handle_reset_walks(activity_service)

        elif resource == "/activity/today" and http_method == "GET":
            return _handle_get_today(activity_service, query_params)

        elif resource == "/activity/weekly" and http_method == "GET":
            return _handle_get_weekly(activity_service, query_params)

        else:
            return _create_error_response(
                404,
                "Not Found",
                f"Resource {resource} with method {http_method} not found",
            )

    except Exception as e:
        _log_api_error("UNEXPECTED_ERROR", str(e), {"resource": event.get("resource")})
        return _create_error_response(
            500, "Internal Server Error", "Unexpected error occurred"
        )


def _handle_health_check(activity_service: ActivityService) -> Dict[str, Any]:
    """
    Handle GET /health endpoint for service health monitoring.

    Response Body:
        {
            "status": "healthy|degraded|unhealthy",
            "services": {"database": {...}, "catalog": {...}},
            "environment": "dev|staging|prod"
        }
    """
    try:
        health_result = activity_service.health_check()

        response_data = {
            **health_result,
            "environment": ENVIRONMENT,
            "version": API_VERSION,
        }

        status_code = 503 if health_result["status"] == "unhealthy" else 200
        return _create_response(status_code, response_data)

    except Exception as e:
        _log_api_error("HEALTH_CHECK_ERROR", str(e))
        return _create_error_response(503, "Health Check Failed", str(e))


def _breed_to_dict(breed) -> Dict[str, Any]:
    data = breed.model_dump(mode="json")
    data["display_name"] = breed.display_name
    return data


def _handle_search_breeds(
    catalog: BreedCatalog, query_params: Dict[str, str]
) -> Dict[str, Any]:
    """
    Handle GET /breeds endpoint.

    Query Parameters:
        - q: Case-insensitive search text; empty returns every breed
    """
    query = unquote_plus(query_params.get("q", ""))
    breeds = catalog.search(query)

    return _create_response(
        200,
        {
            "breeds": [_breed_to_dict(b) for b in breeds],
            "total_count": len(breeds),
            "query": query,
            "catalog_source": "fallback" if catalog.is_fallback else "catalog",
        },
    )


def _handle_get_breed(catalog: BreedCatalog, name: Optional[str]) -> Dict[str, Any]:
    """Handle GET /breeds/{name} endpoint."""
    if not name:
        return _create_error_response(400, "Missing Breed Name", "Breed name is required")

    name = unquote_plus(name)
    breed = catalog.find_by_name(name)

    if breed is None:
        return _create_error_response(404, "Breed Not Found", f"Breed '{name}' not found")

    return _create_response(200, {"breed": _breed_to_dict(breed)})


def _handle_create_walk(activity_service: ActivityService, body: str) -> Dict[str, Any]:
    """
    Handle POST /walks endpoint for recording a completed walk.

    Request Body:
        {
            "humanSteps": 4200,
            "distanceInMeters": 3100.5,
            "startTime": "2024-01-15T07:30:00",
            "endTime": "2024-01-15T08:05:00",
            "profile": {"name": "Biscuit", "breedName": "Beagle",
                        "bodyCondition": "Just right", "age": 4}
        }

    Response Body:
        {"session": {...}, "today": {...}, "message": "Walk recorded"}
    """
    if not body.strip():
        return _create_error_response(400, "Missing Request Body", "Request body is required")

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        return _create_error_response(400, "Invalid JSON", f"Request body is not valid JSON: {e}")

    if not isinstance(data, dict):
        return _create_error_response(400, "Invalid JSON", "Request body must be a JSON object")

    if "humanSteps" not in data:
        return _create_error_response(400, "Missing Required Field", "Field 'humanSteps' is required")

    try:
        profile = _profile_from_mapping(data.get("profile") or {})
        session = activity_service.create_session(
            profile,
            human_steps=data["humanSteps"],
            distance_in_meters=float(data.get("distanceInMeters", 0.0)),
            start_time=_parse_timestamp(data.get("startTime")),
            end_time=_parse_timestamp(data.get("endTime")),
        )
        # Stores the session and recomputes today under one lock
        today = activity_service.record_session(session, profile)
    except (InvalidInputError, ValidationError, ValueError, TypeError, OverflowError) as e:
        return _create_error_response(400, "Invalid Walk Data", str(e))

    return _create_response(
        201,
        {
            "session": session.model_dump(mode="json"),
            "today": today.to_api_dict() if today else None,
            "message": "Walk recorded",
        },
    )


def _handle_reset_walks(activity_service: ActivityService) -> Dict[str, Any]:
    """Handle DELETE /walks endpoint used when the dog profile is reset."""
    if not activity_service.reset():
        return _create_error_response(500, "Reset Failed", "Could not clear walk sessions")

    return _create_response(200, {"message": "Walk sessions cleared"})


def _handle_get_today(
    activity_service: ActivityService, query_params: Dict[str, str]
) -> Dict[str, Any]:
    """
    Handle GET /activity/today endpoint.

    A day without walks is not an error: the record is null and
    has_activity is false.
    """
    try:
        profile = _profile_from_query(query_params)
    except (ValidationError, ValueError) as e:
        return _create_error_response(400, "Invalid Parameters", str(e))

    record = activity_service.today_record(profile)

    return _create_response(
        200,
        {
            "record": record.to_api_dict() if record else None,
            "has_activity": record is not None,
            "goal_steps": activity_service.goal_for(profile),
        },
    )


def _handle_get_weekly(
    activity_service: ActivityService, query_params: Dict[str, str]
) -> Dict[str, Any]:
    """
    Handle GET /activity/weekly endpoint.

    Response Body:
        {
            "records": [{...}, ...],     # most recent first, days without walks omitted
            "trend": "trending up|decreased|stable|not enough data",
            "trend_message": "Activity is trending up!",
            "weekly_average": 6400,
            "weekly_totals": {"total_dog_steps": 19200, "active_days": 3, ...},
            "insights": ["..."]
        }
    """
    try:
        profile = _profile_from_query(query_params)
    except (ValidationError, ValueError) as e:
        return _create_error_response(400, "Invalid Parameters", str(e))

    summary = activity_service.activity_summary(profile)

    return _create_response(
        200,
        {
            "records": [r.to_api_dict() for r in summary["weekly"]],
            "today": summary["today"].to_api_dict() if summary["today"] else None,
            "trend": summary["trend"].value,
            "trend_message": summary["trend"].message,
            "weekly_average": summary["weekly_average"],
            "weekly_totals": summary["weekly_totals"],
            "goal_steps": summary["goal_steps"],
            "recommended_goal": summary["recommended_goal"],
            "breed_multiplier": round(summary["breed_multiplier"], 4),
            "insights": summary["insights"],
        },
    )


def _profile_from_query(query_params: Dict[str, str]) -> DogProfile:
    return _profile_from_mapping(
        {
            "name": query_params.get("name"),
            "breedName": query_params.get("breed"),
            "bodyCondition": query_params.get("bodyCondition"),
            "age": query_params.get("age"),
        }
    )


def _profile_from_mapping(data: Dict[str, Any]) -> DogProfile:
    """
    Build a DogProfile from request data.

    Raises:
        ValueError: If the age is not a whole number
        ValidationError: If any profile field is invalid
    """
    age = data.get("age")
    if age in (None, ""):
        age = None
    else:
        age = int(age)

    fields: Dict[str, Any] = {
        "name": unquote_plus(data.get("name") or "Your Dog"),
        "breed_name": unquote_plus(data.get("breedName") or DEFAULT_BREED_NAME),
        "age_years": age,
    }
    if data.get("bodyCondition"):
        fields["body_condition"] = unquote_plus(data["bodyCondition"])
    if data.get("gender"):
        fields["gender"] = data["gender"]

    return DogProfile(**fields)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be an ISO 8601 string, got {value!r}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _handle_cors_preflight() -> Dict[str, Any]:
    """Handle OPTIONS requests for CORS preflight checks."""
    return {"statusCode": 200, "headers": _get_cors_headers(), "body": ""}


def _create_response(status_code: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a standardized HTTP response with proper headers.

    Args:
        status_code: HTTP status code
        data: Response data to serialize as JSON

    Returns:
        HTTP response dictionary
    """
    return {
        "statusCode": status_code,
        "headers": {**_get_cors_headers(), "Content-Type": "application/json"},
        "body": json.dumps(data, indent=2, default=str),
    }


def _create_error_response(
    status_code: int, error: str, details: str = ""
) -> Dict[str, Any]:
    error_data = {
        "error": error,
        "details": details,
        "timestamp": datetime.utcnow().isoformat(),
        "status_code": status_code,
    }

    return _create_response(status_code, error_data)


def _get_cors_headers() -> Dict[str, str]:
    """CORS headers; the allowed origin comes from CORS_ORIGIN."""
    cors_origin = os.getenv("CORS_ORIGIN", "*")

    return {
        "Access-Control-Allow-Origin": cors_origin,
        "Access-Control-Allow-Methods": "GET,POST,DELETE,OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
        "Access-Control-Max-Age": "86400",  # 24 hours
    }


def _log_api_request(event: Dict[str, Any]) -> None:
    """Log API request information without the dog's name or the body."""
    request_context = event.get("requestContext") or {}
    query_params = event.get("queryStringParameters") or {}
    safe_params = {k: v for k, v in query_params.items() if k not in ["name"]}

    fields: Dict[str, Any] = {
        "httpMethod": event.get("httpMethod"),
        "resource": event.get("resource"),
        "requestId": request_context.get("requestId"),
    }
    if safe_params:
        fields["queryParams"] = safe_params

    log_event("API_REQUEST", **fields)


def _log_api_error(
    error_type: str, error_message: str, context: Optional[Dict[str, Any]] = None
) -> None:
    log_error(error_type, error_message, context)


log_event("API_HANDLER_INITIALIZED", environment=ENVIRONMENT, breedCount=len(CATALOG))
