# utils/content_defaults.py
# Documents materialized the first time a content type is read.
from typing import Callable, Dict


def _about() -> dict:
    return {
        "hero": {
            "title": "Built on Trust, Powered by Innovation",
            "subtitle": "About IndustrialCo",
            "description": "For over 25 years, IndustrialCo has been the trusted partner for manufacturing, construction, and industrial operations worldwide.",
            "primaryButtonText": "Get in Touch",
            "primaryButtonLink": "/contact",
            "secondaryButtonText": "View Our Products",
            "secondaryButtonLink": "/products",
        },
        "stats": {"clients": "2,500+", "countries": "45+", "products": "10,000+", "experience": "25+"},
        "values": [
            {"icon": "Shield", "title": "Safety First", "description": "We prioritize safety in every product and service we provide."},
            {"icon": "Award", "title": "Quality Excellence", "description": "Our commitment to quality drives continuous improvement."},
            {"icon": "Users", "title": "Customer Focus", "description": "We build lasting partnerships by exceeding expectations."},
            {"icon": "Globe", "title": "Global Reach", "description": "Consistent service and support across all markets."},
        ],
        "milestones": [
            {"year": "1999", "title": "Company Founded", "description": "Started as a small industrial equipment supplier"},
            {"year": "2005", "title": "International Expansion", "description": "Opened first overseas office in Europe"},
            {"year": "2012", "title": "ISO Certification", "description": "Achieved ISO 9001 and safety certifications"},
            {"year": "2018", "title": "Digital Transformation", "description": "Launched e-commerce platform and digital services"},
            {"year": "2024", "title": "Sustainability Focus", "description": "Leading green industrial solutions initiative"},
        ],
        "team": [
            {"name": "John Smith", "role": "CEO", "description": "25+ years in industrial manufacturing", "image": "/api/placeholder/300/300"},
            {"name": "Sarah Johnson", "role": "CTO", "description": "Expert in industrial automation", "image": "/api/placeholder/300/300"},
            {"name": "Mike Chen", "role": "VP Operations", "description": "Global supply chain specialist", "image": "/api/placeholder/300/300"},
            {"name": "Lisa Rodriguez", "role": "VP Safety", "description": "Industry leader in safety protocols", "image": "/api/placeholder/300/300"},
        ],
        "certifications": [
            {"title": "ISO 9001:2015", "description": "Quality Management"},
            {"title": "ISO 14001:2015", "description": "Environmental Management"},
            {"title": "OHSAS 18001", "description": "Occupational Health & Safety"},
            {"title": "CE Marking", "description": "European Compliance"},
            {"title": "UL Listed", "description": "North American Markets"},
        ],
    }


def _contact() -> dict:
    return {
        "hero": {
            "title": "Contact Our Team",
            "subtitle": "Get in Touch",
            "description": "Ready to discuss your industrial needs? Our experts are here to help you find the perfect solutions.",
        },
        "contactMethods": [
            {"icon": "Phone", "title": "Phone Support", "description": "Speak with our technical experts", "details": "+1 (555) 123-4567", "hours": "Mon-Fri: 8:00 AM - 6:00 PM EST"},
            {"icon": "Mail", "title": "Email Support", "description": "Get detailed assistance via email", "details": "support@industrialco.com", "hours": "Response within 24 hours"},
            {"icon": "MessageSquare", "title": "Live Chat", "description": "Instant help from our team", "details": "Available on website", "hours": "Mon-Fri: 9:00 AM - 5:00 PM EST"},
            {"icon": "Headphones", "title": "Technical Support", "description": "Expert technical assistance", "details": "tech@industrialco.com", "hours": "24/7 Emergency Support"},
        ],
        "offices": [
            {"name": "North America HQ", "address": "1234 Industrial Blvd\nManufacturing District\nCity, State 12345", "phone": "+1 (555) 123-4567", "email": "na.sales@industrialco.com"},
            {"name": "European Office", "address": "456 Europa Street\nIndustrial Park\nLondon, UK EC1A 1BB", "phone": "+44 20 1234 5678", "email": "eu.sales@industrialco.com"},
            {"name": "Asia Pacific Office", "address": "789 Asia Road\nBusiness District\nSingapore 123456", "phone": "+65 6234 5678", "email": "ap.sales@industrialco.com"},
        ],
        "emergencySupport": {
            "title": "Emergency Support",
            "description": "For urgent technical issues or equipment failures, call our 24/7 emergency line:",
            "phone": "+1 (555) 911-HELP",
        },
    }


def _categories() -> dict:
    return {
        "hero": {
            "title": "Browse Our Product Categories",
            "subtitle": "Product Categories",
            "description": "Explore our comprehensive range of industrial equipment and solutions, organized by category for easy navigation.",
        },
        "categories": [
            {"name": "Heavy Machinery", "icon": "Factory", "productCount": 156, "description": "Excavators, cranes, bulldozers and more", "subcategories": ["Excavators", "Cranes", "Bulldozers"], "featured": True},
            {"name": "Industrial Tools", "icon": "Wrench", "productCount": 423, "description": "Professional grade tools for any job", "subcategories": ["Hand Tools", "Power Tools"], "featured": True},
            {"name": "Safety Equipment", "icon": "HardHat", "productCount": 287, "description": "Keep your workforce protected", "subcategories": ["PPE", "Fall Protection"], "featured": True},
            {"name": "Spare Parts", "icon": "Zap", "productCount": 1024, "description": "OEM and compatible replacement parts", "subcategories": ["Engine Parts", "Hydraulics"], "featured": False},
        ],
        "cta": {
            "title": "Can't Find What You're Looking For?",
            "description": "Our experts can help you find the right products for your specific needs",
            "primaryButtonText": "Contact Our Experts",
            "primaryButtonLink": "/contact",
            "secondaryButtonText": "Browse All Products",
            "secondaryButtonLink": "/products",
        },
    }


def _footer() -> dict:
    return {
        "company": {
            "name": "IndustrialCo",
            "tagline": "Industrial Solutions",
            "description": "Leading provider of industrial equipment and solutions for manufacturing, construction, and heavy industry applications worldwide.",
        },
        "contact": {
            "address": "1234 Industrial Blvd\nManufacturing District\nCity, State 12345",
            "phone": "+1 (555) 123-4567",
            "email": "info@industrialco.com",
            "emergencyPhone": "+1 (555) 911-HELP",
            "hours": [
                {"days": "Mon-Fri", "time": "8:00 AM - 6:00 PM"},
                {"days": "Sat", "time": "9:00 AM - 4:00 PM"},
                {"days": "Sun", "time": "Closed"},
            ],
        },
        "links": {
            "quickLinks": [
                {"title": "All Products", "url": "/products"},
                {"title": "Categories", "url": "/categories"},
                {"title": "About Us", "url": "/about"},
                {"title": "Contact", "url": "/contact"},
                {"title": "Support", "url": "/support"},
            ],
            "categories": [
                {"title": "Heavy Machinery", "url": "/products/category/machinery"},
                {"title": "Industrial Tools", "url": "/products/category/tools"},
                {"title": "Safety Equipment", "url": "/products/category/safety"},
                {"title": "Spare Parts", "url": "/products/category/parts"},
            ],
        },
        "legal": {
            "copyright": "© 2024 IndustrialCo. All rights reserved.",
            "links": [
                {"title": "Privacy Policy", "url": "/privacy"},
                {"title": "Terms of Service", "url": "/terms"},
                {"title": "Sitemap", "url": "/sitemap"},
            ],
        },
    }


def _header() -> dict:
    return {
        "company": {"name": "IndustrialCo", "tagline": "Industrial Solutions"},
        "topBar": {"phone": "+1 (555) 123-4567", "email": "info@industrialco.com", "supportText": "Support"},
        "navigation": [
            {"title": "Home", "url": "/"},
            {
                "title": "Products",
                "url": "/products",
                "dropdown": [
                    {"title": "All Products", "url": "/products"},
                    {"title": "Heavy Machinery", "url": "/products/category/machinery"},
                    {"title": "Industrial Tools", "url": "/products/category/tools"},
                    {"title": "Safety Equipment", "url": "/products/category/safety"},
                ],
            },
            {"title": "Categories", "url": "/categories"},
            {"title": "About", "url": "/about"},
            {"title": "Contact", "url": "/contact"},
        ],
    }


def _settings() -> dict:
    return {
        "general": {
            "siteName": "IndustrialCo",
            "siteDescription": "Leading provider of industrial equipment and solutions",
            "logo": "/logo.png",
            "favicon": "/favicon.ico",
            "primaryColor": "#2563eb",
            "secondaryColor": "#f97316",
        },
        "seo": {
            "defaultTitle": "IndustrialCo - Industrial Solutions & Equipment",
            "defaultDescription": "Leading provider of industrial equipment and solutions for manufacturing, construction, and heavy industry applications worldwide.",
            "keywords": ["industrial equipment", "heavy machinery", "safety equipment", "industrial tools"],
            "ogImage": "/og-image.jpg",
        },
        "social": {},
        "analytics": {},
        "maintenance": {
            "enabled": False,
            "message": "We're currently performing maintenance. Please check back soon.",
        },
    }


def _theme() -> dict:
    return {
        "colors": {
            "primary": "#2563eb",
            "secondary": "#64748b",
            "accent": "#f97316",
            "background": "#ffffff",
            "text": "#1f2937",
            "muted": "#6b7280",
        },
        "typography": {
            "headingFont": "Inter",
            "bodyFont": "Inter",
            "fontSize": {"base": "16px", "heading": "32px"},
        },
        "layout": {"maxWidth": "1200px", "borderRadius": "8px", "spacing": "1rem"},
        "branding": {"companyName": "IndustrialCo"},
    }


def _homepage() -> dict:
    return {
        "heroBanner": {
            "title": "Industrial Solutions for Modern Manufacturing",
            "subtitle": "Trusted by Industry Leaders",
            "description": "Discover our comprehensive range of heavy machinery, industrial tools, and safety equipment. Built for performance, engineered for reliability.",
            "primaryButtonText": "Explore Products",
            "primaryButtonLink": "/products",
            "secondaryButtonText": "Download Catalog",
            "secondaryButtonLink": "/catalog.pdf",
        },
        "stats": {"clients": "2,500+", "countries": "45+", "products": "10,000+", "experience": "25+"},
        "featuredProductIds": ["1", "2", "3"],
        "companyInfo": {
            "title": "Built on Trust, Powered by Innovation",
            "subtitle": "Industry Leader Since 1999",
            "description": "For over 25 years, IndustrialCo has been the trusted partner for manufacturing, construction, and industrial operations worldwide. Our commitment to quality, safety, and innovation drives everything we do.",
            "features": [
                {"icon": "Shield", "title": "Safety First", "description": "ISO certified safety standards"},
                {"icon": "Truck", "title": "Global Delivery", "description": "Worldwide shipping network"},
                {"icon": "Award", "title": "Quality Assured", "description": "Premium grade materials"},
            ],
            "primaryButtonText": "Learn More About Us",
            "primaryButtonLink": "/about",
            "secondaryButtonText": "Contact Our Team",
            "secondaryButtonLink": "/contact",
        },
        "ctaSection": {
            "title": "Ready to Transform Your Operations?",
            "description": "Get in touch with our experts today for personalized industrial solutions",
            "primaryButtonText": "Download Catalog",
            "primaryButtonLink": "/catalog.pdf",
            "secondaryButtonText": "Request Quote",
            "secondaryButtonLink": "/contact",
            "backgroundGradient": "from-industrial-blue to-industrial-dark",
        },
    }


def _email() -> dict:
    return {
        "provider": "smtp",
        "fromName": "IndustrialCo",
        "fromEmail": "support@industrialco.com",
        "replyTo": "no-reply@industrialco.com",
    }


DEFAULTS: Dict[str, Callable[[], dict]] = {
    "about": _about,
    "contact": _contact,
    "categories": _categories,
    "footer": _footer,
    "header": _header,
    "settings": _settings,
    "theme": _theme,
    "homepage": _homepage,
    "email": _email,
}
