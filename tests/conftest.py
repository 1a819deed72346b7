import json

import pytest


@pytest.fixture
def sample_export():
    """Raw collection export with a mix of valid and blank locations."""
    return {
        "collector": {
            "name": "Fabian Wildfang",
            "url": "https://www.mindat.org/user-12345.html",
            "collectorId": "12345",
            "description": "Worldwide mineral specimens",
            "location": "Germany",
        },
        "specimens": [
            {
                "id": "1",
                "title": "Elbaite on Quartz",
                "location": "Brazil, Minas Gerais",
                "species": ["Elbaite", "Quartz"],
                "minerals": ["Tourmaline", "Quartz"],
                "size": "Cabinet",
            },
            {
                "id": "2",
                "title": "Amethyst geode",
                "location": "Brazil, Bahia",
                "species": ["Quartz"],
            },
            {
                "id": "3",
                "title": "Fluorite cube",
                "location": "China",
                "species": ["Fluorite"],
                "images": ["fluorite-1.jpg"],
            },
            {
                "id": "4",
                "title": "Unlabelled",
                "location": "   ",
                "species": ["Calcite"],
            },
            {
                "id": "5",
                "title": "No location at all",
                "species": ["Pyrite"],
            },
        ],
    }


@pytest.fixture
def export_file(tmp_path, sample_export):
    """Write ``sample_export`` to disk and return its path."""
    path = tmp_path / "collection.json"
    path.write_text(json.dumps(sample_export))
    return path
