import shutil
import unittest
import warnings
from pathlib import Path

from PIL import Image

from app.waterfall.media import image_size, item_from_image, items_from_folder, media_key, scan_images


class TestMedia(unittest.TestCase):
    def setUp(self) -> None:
        self.folder = Path('.tmp-tests') / 'media'
        if self.folder.exists():
            shutil.rmtree(self.folder)
        self.folder.mkdir(parents=True)
        Image.new('RGB', (200, 300)).save(self.folder / 'a.png')
        Image.new('RGB', (100, 100)).save(self.folder / 'B.jpg')
        (self.folder / 'broken.png').write_text('not an image')
        (self.folder / 'notes.txt').write_text('ignored')

    def _subfolder(self, name: str) -> Path:
        sub = self.folder / name
        sub.mkdir()
        return sub

    def test_media_key_keeps_case(self) -> None:
        self.assertEqual(media_key(Path('Media') / 'Cats' / 'A.JPG'), 'Media/Cats/A.JPG')

    def test_keys_differ_for_names_differing_only_in_case(self) -> None:
        sub = self._subfolder('case')
        Image.new('RGB', (10, 10)).save(sub / 'c.png')
        Image.new('RGB', (10, 20)).save(sub / 'C.png')
        if len(list(sub.iterdir())) != 2:
            self.skipTest('case-insensitive filesystem')
        keys = [i.key for i in items_from_folder(sub, 100)]
        self.assertEqual(len(set(keys)), 2)

    def test_scan_images_filters_by_extension(self) -> None:
        self.assertEqual([p.name for p in scan_images(self.folder)], ['a.png', 'B.jpg', 'broken.png'])

    def test_item_height_scaled_to_column(self) -> None:
        item = item_from_image(self.folder / 'a.png', 100)
        self.assertEqual(item.height, 150)
        self.assertEqual(item.payload, str(self.folder / 'a.png'))

    def test_exif_rotated_image_uses_displayed_size(self) -> None:
        path = self._subfolder('rotated') / 'phone.jpg'
        exif = Image.Exif()
        exif[0x0112] = 6
        Image.new('RGB', (300, 200)).save(path, exif=exif)

        self.assertEqual(image_size(path), (200, 300))
        self.assertEqual(item_from_image(path, 100).height, 150)

    def test_items_from_folder_skips_unreadable(self) -> None:
        with self.assertLogs('app.waterfall.media', level='WARNING'):
            items = items_from_folder(self.folder, 100)
        self.assertEqual([i.height for i in items], [150, 100])

    def test_items_from_folder_skips_oversized_images(self) -> None:
        sub = self._subfolder('bomb')
        Image.new('RGB', (200, 300)).save(sub / 'small.png')
        Image.new('RGB', (400, 400)).save(sub / 'big.png')

        limit = Image.MAX_IMAGE_PIXELS
        self.addCleanup(setattr, Image, 'MAX_IMAGE_PIXELS', limit)
        Image.MAX_IMAGE_PIXELS = 50000
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', Image.DecompressionBombWarning)
            with self.assertLogs('app.waterfall.media', level='WARNING'):
                items = items_from_folder(sub, 100)
        self.assertEqual([i.height for i in items], [150])

    def test_scan_images_requires_directory(self) -> None:
        with self.assertRaises(NotADirectoryError):
            scan_images(self.folder / 'missing')


if __name__ == '__main__':
    unittest.main()
