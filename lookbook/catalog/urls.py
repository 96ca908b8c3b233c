from django.urls import path

from . import views

app_name = 'catalog'

urlpatterns = [
    path('api/products-without-images/', views.products_without_images, name='products_without_images'),
    path('api/debug-color-match/', views.debug_color_match, name='debug_color_match'),
    path('api/admin/images/stats/', views.image_stats, name='image_stats'),
]
