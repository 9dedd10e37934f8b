from django.urls import path
from . import views

app_name = 'gift_cards'

urlpatterns = [
    # Admin endpoints
    path('admin/cards/', views.AdminGiftCardListView.as_view(), name='admin_list'),
    path('admin/cards/issue/', views.AdminGiftCardIssueView.as_view(), name='admin_issue'),
    path('admin/cards/<int:gift_card_id>/', views.AdminGiftCardDeleteView.as_view(), name='admin_delete'),
    path('admin/cards/<int:gift_card_id>/restore/', views.AdminGiftCardRestoreView.as_view(),
         name='admin_restore'),

    # Card holder endpoints
    path('', views.GiftCardListView.as_view(), name='list'),
    path('variants/', views.GiftCardVariantListView.as_view(), name='variants'),
    path('purchase/', views.GiftCardPurchaseView.as_view(), name='purchase'),
    path('apply/', views.GiftCodeApplyView.as_view(), name='apply'),
    path('<str:code>/', views.GiftCardDetailView.as_view(), name='detail'),
    path('<str:code>/transfer/', views.GiftCardTransferView.as_view(), name='transfer'),
]
