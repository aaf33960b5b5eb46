from fastapi import APIRouter, Depends

from catalog_api.api.deps import require_admin
from catalog_api.api.endpoints import (
    # Public catalog
    navbar_categories,
    categories,
    subcategories,
    products,
    pages,
    # Public lead capture
    enquiries,
)
from catalog_api.api.endpoints.admin import (
    auth as admin_auth,
    navbar_categories as admin_navbar_categories,
    categories as admin_categories,
    subcategories as admin_subcategories,
    products as admin_products,
    enquiries as admin_enquiries,
    notifications as admin_notifications,
    dashboard as admin_dashboard,
)


# Create main API router
api_router = APIRouter(prefix="/api")

# ==================== Public Catalog ====================
api_router.include_router(navbar_categories.router, prefix="/navbar-category")
api_router.include_router(categories.router, prefix="/category")
api_router.include_router(subcategories.router, prefix="/subcategory")
api_router.include_router(products.router, prefix="/product")
api_router.include_router(pages.router, prefix="/pages")

# ==================== Public Enquiries ====================
api_router.include_router(enquiries.router)

# ==================== Admin ====================
# Login/logout are reachable without a session; everything on admin_router
# goes through require_admin before the handler runs.
api_router.include_router(admin_auth.router, prefix="/admin")

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
admin_router.include_router(admin_navbar_categories.router, prefix="/navbar-category")
admin_router.include_router(admin_categories.router, prefix="/category")
admin_router.include_router(admin_subcategories.router, prefix="/subcategory")
admin_router.include_router(admin_products.router, prefix="/product")
admin_router.include_router(admin_enquiries.contact_router, prefix="/contact-enquiry")
admin_router.include_router(admin_enquiries.product_router, prefix="/product-enquiry")
admin_router.include_router(admin_notifications.router, prefix="/notifications")
admin_router.include_router(admin_dashboard.router, prefix="/dashboard")

api_router.include_router(admin_router)
