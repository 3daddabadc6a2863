from django.contrib import admin

from .models import Car, Employee, Customer, Item


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ['car_name', 'number_plate', 'driver_name', 'balance', 'left', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['car_name', 'number_plate', 'driver_name', 'helper_name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_name', 'category', 'phone_number', 'balance', 'status']
    list_filter = ['category', 'status']
    search_fields = ['employee_name', 'phone_number']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['customer_name', 'phone_number', 'balance', 'status']
    list_filter = ['status']
    search_fields = ['customer_name', 'phone_number']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ['item_name', 'price', 'driver_price', 'helper_price']
    search_fields = ['item_name']
    readonly_fields = ['created_at', 'updated_at']
