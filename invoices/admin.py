"""Django admin configuration for invoices."""

from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .models import Invoice, InvoiceDocument


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('invoice_number', 'get_order_ref', 'invoice_date', 'created_at')
    list_filter = ('invoice_date',)
    search_fields = ('invoice_number', 'order__ref_number')
    list_select_related = ('order',)
    readonly_fields = ('get_documents',)

    def get_order_ref(self, obj):
        return obj.order.ref_number
    get_order_ref.short_description = 'Order'

    def get_documents(self, obj):
        rows = format_html_join(
            '',
            '<tr><td>{}</td><td>{}</td><td style="text-align:right;">{}</td></tr>',
            ((doc.original_name, doc.mimetype, doc.size) for doc in obj.documents.all()),
        )
        return format_html(
            '<table><thead><tr><th>File</th><th>Type</th><th>Bytes</th></tr></thead>'
            '<tbody>{}</tbody></table>',
            rows,
        )
    get_documents.short_description = 'Documents'


@admin.register(InvoiceDocument)
class InvoiceDocumentAdmin(admin.ModelAdmin):
    list_display = ('original_name', 'invoice', 'mimetype', 'size', 'created_at')
    search_fields = ('original_name', 'filename', 'invoice__invoice_number')
    readonly_fields = ('filename', 'filepath', 'mimetype', 'size', 'created_at')
