from django.contrib import admin

from events.models import Event, EventGalleryImage, TicketType


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1
    readonly_fields = ["sold"]


class GalleryImageInline(admin.TabularInline):
    model = EventGalleryImage
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "host", "date", "location", "status", "created_at"]
    list_filter = ["status", "is_virtual", "country"]
    search_fields = ["title", "slug", "location", "venue"]
    prepopulated_fields = {"slug": ["title"]}
    inlines = [TicketTypeInline, GalleryImageInline]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "price", "quantity", "sold"]
    list_filter = ["event"]
    readonly_fields = ["sold"]
