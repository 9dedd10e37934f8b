from django.urls import path
from . import views

urlpatterns = [
    path('createOrder', views.CreateOrderView.as_view(), name='create-order'),
    path('getOrderDetail', views.GetOrderDetailView.as_view(), name='get-order-detail'),
    path('addItem', views.AddItemView.as_view(), name='add-item'),
    path('completeOrder', views.CompleteOrderView.as_view(), name='complete-order'),
]
