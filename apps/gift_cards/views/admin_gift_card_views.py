"""
Back-office gift card views: reporting, manual issue, soft delete and restore.
"""
import logging

from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.views import APIView

from apps.common.exceptions import validation_error_detail
from apps.common.utils import success_response, error_response, paginated_response
from ..exceptions import GiftCardError
from ..serializers import AdminGiftCardSerializer, GiftCardIssueSerializer
from ..services import GiftCardIssuanceService, GiftCardLifecycleService, report_gift_cards, sortable_fields

logger = logging.getLogger(__name__)


class AdminGiftCardListView(APIView):
    """All cards sorted by one of the sortable attributes"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        sort = request.query_params.get('sort', 'expiration_date')
        if sort not in sortable_fields():
            return error_response("Invalid sort attribute", {'sort': sortable_fields()})

        queryset = report_gift_cards(
            sort=sort,
            descending=request.query_params.get('direction', 'desc') != 'asc',
            include_deleted=request.query_params.get('include_deleted') in ('1', 'true'),
            status=request.query_params.get('status'),
        )
        return paginated_response(queryset, AdminGiftCardSerializer, request)


class AdminGiftCardIssueView(APIView):
    """Issue a card outside of any order"""
    permission_classes = [IsAdminUser]

    def post(self, request):
        serializer = GiftCardIssueSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid gift card data", serializer.errors)

        try:
            gift_card = GiftCardIssuanceService.issue_manual(**serializer.validated_data)
        except ValidationError as e:
            return error_response("Invalid gift card data", validation_error_detail(e))

        logger.info(f"Admin {request.user.id} issued gift card {gift_card.id}")
        return success_response(
            AdminGiftCardSerializer(gift_card).data, 'Gift card issued', status.HTTP_201_CREATED
        )


class AdminGiftCardDeleteView(APIView):
    """Soft-delete a card"""
    permission_classes = [IsAdminUser]

    def delete(self, request, gift_card_id):
        try:
            gift_card = GiftCardLifecycleService.soft_delete_by_id(gift_card_id)
        except GiftCardError as e:
            return error_response(e.message, {'code': e.code}, e.status_code)
        return success_response(AdminGiftCardSerializer(gift_card).data, 'Gift card deleted')


class AdminGiftCardRestoreView(APIView):
    """Undo a soft delete"""
    permission_classes = [IsAdminUser]

    def post(self, request, gift_card_id):
        try:
            gift_card = GiftCardLifecycleService.restore_by_id(gift_card_id)
        except GiftCardError as e:
            return error_response(e.message, {'code': e.code}, e.status_code)
        return success_response(AdminGiftCardSerializer(gift_card).data, 'Gift card restored')
