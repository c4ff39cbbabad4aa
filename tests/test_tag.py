from bs4 import BeautifulSoup
import pytest

from mapped_images.errors import (
    InvalidMetadataError,
    MissingAltError,
    MissingIndexError,
    MissingMetadataError,
    MissingSrcError,
)
from mapped_images.metadata import Dimensions, GroupedImage, SingleImage
from mapped_images.tag import generate_image_tag


def parse_img(html):
    return BeautifulSoup(html, 'html.parser').img


class TestValidation:
    def test_missing_index(self):
        with pytest.raises(MissingIndexError):
            generate_image_tag(None, '/', 'img.png', alt='cat')

    def test_missing_alt(self, single_index):
        with pytest.raises(MissingAltError) as excinfo:
            generate_image_tag(single_index, '/', 'img.png')
        assert 'img.png' in str(excinfo.value)

    def test_index_checked_before_alt(self):
        with pytest.raises(MissingIndexError):
            generate_image_tag(None, '/', 'img.png')

    def test_alt_checked_before_src(self, single_index):
        with pytest.raises(MissingAltError):
            generate_image_tag(single_index, '/', '')

    @pytest.mark.parametrize('src', ['', None])
    def test_missing_src(self, single_index, src):
        with pytest.raises(MissingSrcError):
            generate_image_tag(single_index, '/', src, alt='cat')

    def test_missing_metadata(self, single_index):
        with pytest.raises(MissingMetadataError) as excinfo:
            generate_image_tag(single_index, '/', 'dog.png', alt='dog')
        assert 'dog.png' in str(excinfo.value)
        assert excinfo.value.src == 'dog.png'

    def test_null_entry_is_missing(self):
        with pytest.raises(MissingMetadataError):
            generate_image_tag({'img.png': None}, '/', 'img.png', alt='cat')

    def test_invalid_entry(self):
        with pytest.raises(InvalidMetadataError):
            generate_image_tag({'img.png': {'width': 100}}, '/', 'img.png', alt='cat')


class TestSingleImage:
    def test_basic_tag(self, single_index):
        html = generate_image_tag(single_index, 'https://x/', 'img.png', alt='cat')
        assert html == '<img width="100" height="50" src="https://x/img.png" alt="cat" />'

    def test_empty_alt_is_decorative(self, single_index):
        html = generate_image_tag(single_index, 'https://x/', 'img.png', alt='')
        assert html.endswith(' alt="" />')

    def test_class_and_lazy(self, single_index):
        html = generate_image_tag(single_index, '/images', 'img.png', class_attr='hero', alt='cat', lazy=True)
        assert html == (
            '<img loading="lazy" width="100" height="50" src="/images/img.png" class="hero" alt="cat" />'
        )

    def test_not_lazy_has_no_loading_attribute(self, single_index):
        html = generate_image_tag(single_index, '/', 'img.png', alt='cat', lazy=False)
        assert 'loading=' not in html

    def test_sizes_ignored(self, single_index):
        html = generate_image_tag(single_index, '/', 'img.png', alt='cat', sizes='auto')
        assert 'sizes=' not in html
        assert 'loading=' not in html

    def test_parsed_metadata_accepted(self):
        html = generate_image_tag({'img.png': SingleImage(10, 20)}, '', 'img.png', alt='x')
        assert html == '<img width="10" height="20" src="img.png" alt="x" />'

    def test_escapes_attribute_values(self, single_index):
        index = {'a&b.png': {'width': 1, 'height': 2}}
        html = generate_image_tag(index, '/', 'a&b.png', class_attr='x" onload="y', alt='Tom & "Jerry" <3')
        assert 'alt="Tom &amp; &quot;Jerry&quot; &lt;3"' in html
        assert 'src="/a&amp;b.png"' in html
        img = parse_img(html)
        assert img['alt'] == 'Tom & "Jerry" <3'
        assert img['class'] == ['x"', 'onload="y']
        assert img.get('onload') is None


class TestGroupedImage:
    def test_largest_variant(self, grouped_index):
        html = generate_image_tag(grouped_index, '/images/', 'a', alt='A')
        assert html == (
            '<img loading="lazy" sizes="auto" width="800" height="400" '
            'srcset="/images/a_w200.png 200w, /images/a_w800.png 800w" '
            'src="/images/a_w800.png" alt="A" />'
        )

    def test_srcset_follows_index_order(self):
        index = {
            'b': {
                'files': {
                    'b_w900.png': {'width': 900, 'height': 600},
                    'b_w300.png': {'width': 300, 'height': 200},
                    'b_w600.png': {'width': 600, 'height': 400},
                }
            }
        }
        img = parse_img(generate_image_tag(index, '', 'b', alt='B'))
        assert img['srcset'] == 'b_w900.png 900w, b_w300.png 300w, b_w600.png 600w'
        assert img['src'] == 'b_w900.png'

    def test_first_widest_wins_tie(self):
        index = {
            'c': GroupedImage(
                {
                    'c_small.png': Dimensions(100, 50),
                    'c_first.png': Dimensions(500, 250),
                    'c_second.png': Dimensions(500, 300),
                }
            )
        }
        img = parse_img(generate_image_tag(index, '/', 'c', alt='C'))
        assert img['src'] == '/c_first.png'
        assert img['height'] == '250'

    def test_default_image_keeps_largest_dimensions(self, grouped_index):
        img = parse_img(generate_image_tag(grouped_index, '/images/', 'a', alt='A', default_image='a_w200.png'))
        assert img['src'] == '/images/a_w200.png'
        assert img['width'] == '800'
        assert img['height'] == '400'

    def test_explicit_sizes_not_lazy(self, grouped_index):
        html = generate_image_tag(grouped_index, '/images/', 'a', alt='A', sizes='600px')
        assert html.startswith('<img sizes="600px" width="800"')
        assert 'loading=' not in html

    def test_explicit_sizes_and_lazy(self, grouped_index):
        html = generate_image_tag(grouped_index, '/images/', 'a', alt='A', sizes='600px', lazy=True)
        assert html.startswith('<img loading="lazy" sizes="600px"')

    def test_sizes_none_means_auto(self, grouped_index):
        html = generate_image_tag(grouped_index, '/images/', 'a', alt='A', sizes=None)
        assert html.startswith('<img loading="lazy" sizes="auto"')

    def test_class_before_alt(self, grouped_index):
        html = generate_image_tag(grouped_index, '/images/', 'a', class_attr='wide', alt='')
        assert html.endswith('src="/images/a_w800.png" class="wide" alt="" />')

    def test_empty_files(self):
        with pytest.raises(InvalidMetadataError):
            generate_image_tag({'d': {'files': {}}}, '/', 'd', alt='D')
