"""Tests for formstream.multipart module."""

import io

from formstream.mimetype import CustomMimetypeResolver
from formstream.multipart import build_multipart


class TestBuildMultipart:
    """Tests for build_multipart function."""

    def test_build_with_only_files(self):
        """Test building multipart with only files."""
        files = {"doc": b"file content"}
        content_type, body = build_multipart(None, files)

        assert content_type.startswith("multipart/form-data; boundary=")
        assert b"file content" in body
        assert b'name="doc"; filename="doc"' in body

    def test_build_with_data_and_files(self):
        """Test building multipart with both data and files."""
        data = {"field1": "value1", "field2": "value2"}
        files = {"upload": b"file content"}
        content_type, body = build_multipart(data, files)

        assert b"value1" in body
        assert b"value2" in body
        assert b"file content" in body
        assert body.index(b"value1") < body.index(b"file content")

    def test_build_with_file_tuple(self):
        """Test building multipart with file as (filename, content, type) tuple."""
        files = {"doc": ("report.pdf", b"PDF content", "application/pdf")}
        content_type, body = build_multipart(None, files)

        assert b'filename="report.pdf"' in body
        assert b"Content-Type: application/pdf" in body
        assert b"PDF content" in body

    def test_build_with_file_tuple_no_content_type(self):
        """Test file tuple with None content type resolves from the filename."""
        files = {"doc": ("photo.JPG", b"binary", None)}
        content_type, body = build_multipart(None, files)

        assert b"Content-Type: image/jpeg" in body

    def test_unknown_type_defaults_to_octet_stream(self):
        """Test unresolvable filenames fall back to octet-stream."""
        files = {"doc": ("file.zzz", b"binary", None)}
        content_type, body = build_multipart(None, files)

        assert b"Content-Type: application/octet-stream" in body

    def test_custom_resolver(self):
        """Test a custom resolver is honoured."""
        files = {"doc": ("file.zzz", b"binary", None)}
        resolver = CustomMimetypeResolver({"zzz": "custom/type"})
        content_type, body = build_multipart(None, files, mimetype_resolver=resolver)

        assert b"Content-Type: custom/type" in body

    def test_file_object(self, png_path):
        """Test open files use their own name."""
        with open(png_path, "rb") as f:
            content_type, body = build_multipart(None, {"image": f})

        assert b'filename="httplug.png"' in body
        assert b"Content-Type: image/png" in body
        assert png_path.read_bytes() in body

    def test_anonymous_file_object(self):
        """Test unnamed buffers use the field name."""
        content_type, body = build_multipart(None, {"blob": io.BytesIO(b"data")})

        assert b'name="blob"; filename="blob"' in body

    def test_boundary_is_unique(self):
        """Test each call generates unique boundary."""
        files = {"f": b"content"}
        ct1, _ = build_multipart(None, files)
        ct2, _ = build_multipart(None, files)

        b1 = ct1.split("boundary=")[1]
        b2 = ct2.split("boundary=")[1]
        assert b1 != b2

    def test_explicit_boundary(self):
        """Test an explicit boundary is used verbatim."""
        content_type, body = build_multipart({"k": "v"}, {}, boundary="fixed")

        assert content_type == "multipart/form-data; boundary=fixed"
        assert body.startswith(b"--fixed\r\n")

    def test_body_ends_with_closing_boundary(self):
        """Test body ends with closing boundary."""
        files = {"f": b"content"}
        content_type, body = build_multipart(None, files)

        boundary = content_type.split("boundary=")[1]
        assert body.endswith(f"--{boundary}--\r\n".encode())

    def test_multiple_files(self):
        """Test building multipart with multiple files."""
        files = {
            "file1": b"content1",
            "file2": ("name2.txt", b"content2", "text/plain"),
            "file3": b"content3",
        }
        content_type, body = build_multipart(None, files)

        assert b"content1" in body
        assert b"content2" in body
        assert b"content3" in body
        assert b'name="file1"' in body
        assert b'name="file2"' in body
        assert b'name="file3"' in body

    def test_empty_files_dict(self):
        """Test building with empty files dict."""
        content_type, body = build_multipart(None, {})
        boundary = content_type.split("boundary=")[1]
        assert body == f"--{boundary}--\r\n".encode()

    def test_special_characters_in_filename(self):
        """Test filename with special characters."""
        files = {"f": ("file name.txt", b"content", "text/plain")}
        content_type, body = build_multipart(None, files)

        assert b'filename="file name.txt"' in body
