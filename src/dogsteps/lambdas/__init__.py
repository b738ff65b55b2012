"""
AWS Lambda functions for the DogSteps application.

This package contains the Lambda function handlers for the DogSteps
system.

Modules:
    api_handler: Provides REST API endpoints for the companion app
"""

# Lambda entry points are referenced by module path, e.g.
# dogsteps.lambdas.api_handler.lambda_handler
