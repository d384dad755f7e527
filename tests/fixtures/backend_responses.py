"""
Mock backend responses for testing.

Contains realistic bodies returned by the scraper backend for detail and
search endpoints, in both the flat shape and the {"success", "data"}
envelope. These fixtures are used with respx to mock httpx calls in tests.
"""

# Flat body of the wire contract
# GET /api/hanime/86994
HANIME_FLAT_RESPONSE = {
    "Title": "Test Title",
    "Description": "Desc",
    "Year": 2023,
    "Rating": 4.5,
}

# Envelope body as produced by the gateway
# GET /api/hanime/86994
HANIME_ENVELOPE_RESPONSE = {
    "success": True,
    "message": None,
    "data": {
        "id": "86994",
        "title": "Test Title",
        "originalTitle": "テストタイトル",
        "description": "Desc",
        "year": 2023,
        "rating": 4.5,
        "releaseDate": "2023-05-12T00:00:00",
        "primary": "https://cdn.example.org/86994/cover.jpg",
        "backdrop": None,
        "thumbnails": [
            "https://cdn.example.org/86994/thumb1.jpg",
            "https://cdn.example.org/86994/thumb2.jpg",
        ],
        "genres": ["Romance"],
        "tags": ["Vanilla", "School"],
        "studios": ["Studio A"],
        "series": ["Series X"],
        "people": [
            {"name": "Voice One", "type": "Actor", "role": "Heroine"},
            {"name": "Boss", "type": "Director", "role": None},
        ],
        "sourceUrls": ["https://hanime1.me/watch?v=86994"],
    },
}

# Envelope reporting an unknown work
HANIME_NOT_FOUND_RESPONSE = {
    "success": False,
    "message": "Content not found: 99999",
    "data": None,
}

# DLsite envelope, source URL on the "pro" section
DLSITE_ENVELOPE_RESPONSE = {
    "success": True,
    "data": {
        "id": "VJ012345",
        "title": "Visual Novel",
        "year": 2021,
        "sourceUrls": ["https://www.dlsite.com/pro/work/=/product_id/VJ012345.html"],
    },
}

# GET /api/hanime/search?title=Love&max=10
HANIME_SEARCH_RESPONSE = {
    "success": True,
    "data": [
        {
            "id": "86994",
            "title": "Love Story",
            "description": "First",
            "year": 2023,
            "primary": "https://cdn.example.org/86994/cover.jpg",
        },
        {
            "id": "86995",
            "title": "Love Story 2",
            "year": 2024,
        },
        {
            "title": "No id, skipped",
        },
    ],
}

HANIME_SEARCH_EMPTY_RESPONSE = {
    "success": True,
    "data": [],
}
