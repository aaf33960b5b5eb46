from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.models.category import Category
from catalog_api.models.subcategory import SubCategory
from catalog_api.models.product import Product
from catalog_api.models.enquiry import ContactEnquiry, ProductEnquiry, EnquiryStatus
from catalog_api.models.notification import Notification, NotificationType

__all__ = [
    "NavbarCategory",
    "Category",
    "SubCategory",
    "Product",
    "ContactEnquiry",
    "ProductEnquiry",
    "EnquiryStatus",
    "Notification",
    "NotificationType",
]
