import json

import pytest


@pytest.fixture
def single_index():
    return {'img.png': {'width': 100, 'height': 50}}


@pytest.fixture
def grouped_index():
    return {
        'a': {
            'files': {
                'a_w200.png': {'width': 200, 'height': 100},
                'a_w800.png': {'width': 800, 'height': 400},
            }
        }
    }


@pytest.fixture
def write_index(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding='utf-8')
        return path

    return _write
