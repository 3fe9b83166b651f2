"""
Prompt builders for business extraction.
"""

from __future__ import annotations


def url_extraction_prompt(url: str, *, city: str, region: str) -> str:
    """
    Extract one business from a Google Business Profile / Maps link.
    """
    return (
        "Please visit the following Google Business Profile or Google Maps URL and extract the "
        f"business information: {url}\n\n"
        "Extract the following information and return it as a JSON object with these exact keys. "
        "If information is missing from the Google Business Profile, search for the business website "
        "or other online resources to find complete details:\n\n"
        "- name: Business name\n"
        "- address: Full business address\n"
        "- phone: Phone number (format: (xxx) xxx-xxxx if possible)\n"
        "- email: Email address (search the business website or contact pages if not on the profile)\n"
        "- website: Website URL (search if not directly available on the profile)\n"
        "- description: Business description of approximately 700 characters that includes services "
        "offered, specialties, years in business, service area, and what makes them unique\n"
        '- categories: Array of business categories/types (e.g., ["restaurant", "italian-food", "dining"])\n\n'
        "Important guidelines:\n"
        "1. Use web browsing to find missing information like email addresses by visiting the business website\n"
        "2. If any information is still not available after searching, use null for that field\n"
        "3. For the description, aim for about 700 characters\n"
        "4. For categories, match common business types suitable for a local directory\n"
        "5. Make sure website URLs include the protocol (http:// or https://)\n"
        "6. Return only valid JSON, no additional text or explanations\n\n"
        "Example response format:\n"
        "{\n"
        '  "name": "Example Business",\n'
        f'  "address": "123 Main St, {city}, {region}",\n'
        '  "phone": "(604) 555-1234",\n'
        '  "email": "info@example.com",\n'
        '  "website": "https://www.example.com",\n'
        f'  "description": "A local business serving the {city} community since 1995...",\n'
        '  "categories": ["professional-services", "consulting"]\n'
        "}"
    )


def top_businesses_prompt(category_name: str, city_name: str) -> str:
    """
    Find and describe the top 3 businesses for a category, grounded in Google Search.
    """
    return (
        "You are helping to create a business directory. Find the top 3 businesses for "
        f'"{category_name}" in "{city_name}" using Google Search, then extract their information.\n\n'
        "SEARCH AND EXTRACT REQUIREMENTS:\n"
        f'1. Search Google for the top 3 businesses in the "{category_name}" category located in "{city_name}"\n'
        "2. For each business, find: name, complete address (must be in "
        f"{city_name}), phone number, website URL, email address (check the homepage, /contact and "
        "/about pages; use null if none is found), and a description of their services\n\n"
        "PROCESSING REQUIREMENTS:\n"
        "3. Write a description of approximately 700 characters covering services related to "
        f'"{category_name}", what makes them highly rated, service area (mention "{city_name}"), '
        "years of experience if available, and key selling points for local customers\n"
        "4. Give an array of business categories in slug format, e.g. "
        '"Auto Glass Repair" -> ["auto-glass-repair", "automotive-services"]\n\n'
        "IMPORTANT REQUIREMENTS:\n"
        f'- Only include businesses that are actually located in "{city_name}" (verify addresses)\n'
        "- Return exactly 3 businesses (or fewer if less than 3 qualify)\n"
        "- Return ONLY valid JSON, no additional text or explanations\n\n"
        "OUTPUT FORMAT: a JSON array of objects with this exact structure:\n"
        "[\n"
        "  {\n"
        '    "name": "Business Name",\n'
        f'    "address": "123 Main St, {city_name}, Province/State",\n'
        '    "phone": "(604) 555-1234",\n'
        '    "email": "contact@business.com",\n'
        '    "website": "https://www.business.com",\n'
        '    "description": "Description including services, specialties and service area...",\n'
        '    "categories": ["category-1", "category-2"]\n'
        "  }\n"
        "]\n\n"
        f'Begin your search now for "{category_name}" businesses in "{city_name}".'
    )
