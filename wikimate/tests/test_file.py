"""Test various aspects of Files."""
from unittest import TestCase, mock
import io
import requests
import wikimate
from fakewiki import FakeWiki

PNG = {'url': 'https://wiki.example/images/a/ab/Sausage.png', 'size': 1024,
       'mime': 'image/png', 'sha1': 'd3adb33f'}

class TestFile(TestCase):
    """Test Files."""
    def setUp(self):
        self.wiki = FakeWiki(files={'Sausage.png': PNG})

    def test_existing(self):
        """Assert an uploaded file reports its details."""
        image = wikimate.File(self.wiki, name='File:Sausage.png')
        self.assertTrue(image.exists())
        self.assertEqual(image.get_url(), PNG['url'])
        self.assertEqual(image.get_size(), 1024)
        self.assertEqual(image.get_mime(), 'image/png')
        self.assertEqual(image.get_sha1(), 'd3adb33f')
        self.assertEqual(len(self.wiki.calls_to('query')), 1)

    def test_missing(self):
        """Assert a file never uploaded does not exist."""
        image = wikimate.File(self.wiki, name='Chorizo.png')
        self.assertFalse(image)
        self.assertIsNone(image.get_url())
        self.assertIsNone(image.download())

    def test_invalid(self):
        """Assert a rejected name is kept as an error."""
        image = wikimate.File(self.wiki, name='<Bad>.png')
        self.assertFalse(image.refresh())
        self.assertEqual(image.get_error()['code'], 'invalidtitle')

    def test_upload(self):
        """Assert uploads go through the wiki and update the details."""
        image = wikimate.File(self.wiki, name='Chorizo.png')
        self.assertTrue(image.upload(io.BytesIO(b'PNG'), comment='Spicy',
                                     text='A chorizo.'))
        params = self.wiki.calls_to('upload')[0]
        self.assertEqual(params['filename'], 'Chorizo.png')
        self.assertEqual(params['comment'], 'Spicy')
        self.assertEqual(params['text'], 'A chorizo.')
        self.assertFalse(params['ignorewarnings'])
        self.assertTrue(image.exists())
        self.assertEqual(image.get_mime(), 'image/png')

    def test_upload_warning(self):
        """Assert an upload held back by warnings is kept as an error."""
        self.wiki.result = {'result': 'Warning',
                            'warnings': {'exists': 'Sausage.png'}}
        image = wikimate.File(self.wiki, name='Sausage.png')
        self.assertFalse(image.upload(io.BytesIO(b'PNG')))
        error = image.get_error()
        self.assertEqual(error['code'], 'uploadfailure')
        self.assertEqual(error['warnings'], {'exists': 'Sausage.png'})

    def test_upload_error(self):
        """Assert API errors on upload are kept."""
        self.wiki.fail = wikimate.WikiError.fileexists_no_change('Same file.')
        image = wikimate.File(self.wiki, name='Sausage.png')
        self.assertFalse(image.upload(io.BytesIO(b'PNG'), overwrite=True))
        self.assertEqual(image.get_error()['code'], 'fileexists_no_change')

    def test_download(self):
        """Assert download fetches the file's URL."""
        resp = mock.Mock(content=b'PNG')
        self.wiki._session = mock.Mock() # pylint: disable=protected-access
        self.wiki._session.get.return_value = resp
        image = wikimate.File(self.wiki, name='Sausage.png')
        self.assertEqual(image.download(), b'PNG')
        self.assertEqual(self.wiki._session.get.call_args[0], (PNG['url'],))

    def test_download_failure(self):
        """Assert a failed download gives None and an error."""
        self.wiki._session = mock.Mock() # pylint: disable=protected-access
        self.wiki._session.get.side_effect = requests.exceptions.Timeout(
            'timed out')
        image = wikimate.File(self.wiki, name='Sausage.png')
        self.assertIsNone(image.download())
        self.assertEqual(image.get_error()['code'], 'transport')

    def test_delete(self):
        """Assert deleting marks the file missing."""
        image = wikimate.File(self.wiki, name='Sausage.png')
        self.assertTrue(image.delete('Duplicate'))
        self.assertEqual(self.wiki.calls_to('delete')[0]['title'],
                         'File:Sausage.png')
        self.assertFalse(image.exists())
