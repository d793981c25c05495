"""
AWS Lambda handler for the Customer Service
This module adapts the FastAPI application to work with AWS Lambda + API Gateway
"""

import json
import logging
import os

from mangum import Mangum

from main import app

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Configure Mangum adapter for Lambda
handler = Mangum(
    app,
    lifespan="off",  # Disable lifespan events for Lambda
    api_gateway_base_path=None,
    text_mime_types=[
        "application/json",
        "text/plain",
        "text/html"
    ],
    exclude_headers=["x-amzn-trace-id"]
)


def _describe_event(event: dict) -> str:
    """Method and path of an API Gateway v1 or v2 event"""
    if event.get('version') == '2.0':
        http = event.get('requestContext', {}).get('http', {})
        return f"{http.get('method', 'UNKNOWN')} {http.get('path', 'UNKNOWN')}"
    if 'httpMethod' in event:
        return f"{event.get('httpMethod', 'UNKNOWN')} {event.get('path', 'UNKNOWN')}"
    return "unknown event format"


def lambda_handler(event, context):
    """
    AWS Lambda entry point

    Args:
        event: API Gateway event data
        context: Lambda runtime context

    Returns:
        API Gateway response format
    """
    logger.info(f"Lambda function: {context.function_name} ({os.getenv('ENVIRONMENT', 'not-set')})")
    logger.info(f"API Gateway event: {_describe_event(event)}")

    try:
        response = handler(event, context)
        logger.info(f"Mangum response status: {response.get('statusCode', 'UNKNOWN')}")
        return response

    except Exception as e:
        # Request bodies carry credentials, so the event itself is never logged
        logger.error(f"Lambda handler error: {str(e)}", exc_info=True)
        return {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps({
                "error": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "requestId": context.aws_request_id
            })
        }
