"""
Custom exception handlers for consistent API responses
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

from apps.gift_cards.exceptions import GiftCardError

logger = logging.getLogger(__name__)


def validation_error_detail(exc):
    """Field -> messages mapping of a Django ValidationError"""
    if hasattr(exc, 'error_dict'):
        return exc.message_dict
    return {'non_field_errors': exc.messages}


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    if isinstance(exc, GiftCardError):
        logger.warning(f"Gift card error: {exc.code}: {exc.message}")
        return Response({
            'code': exc.status_code,
            'msg': exc.message,
            'errors': {'code': exc.code}
        }, status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        logger.warning(f"Validation error: {exc}")
        return Response({
            'code': status.HTTP_400_BAD_REQUEST,
            'msg': 'Validation error',
            'errors': validation_error_detail(exc)
        }, status=status.HTTP_400_BAD_REQUEST)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        logger.error(f"API Exception: {exc}", exc_info=True)

        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'
        elif response.status_code >= 500:
            custom_response_data['msg'] = 'Internal server error'
            # Don't expose internal errors in production
            if not hasattr(context['request'], 'user') or not context['request'].user.is_staff:
                custom_response_data['errors'] = {'detail': 'Internal server error'}

        response.data = custom_response_data

    return response
