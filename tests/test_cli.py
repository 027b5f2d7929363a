"""Tests for the CLI module."""

import argparse
import json
from unittest.mock import MagicMock, patch

import fitz  # PyMuPDF

from paged_export.cli import load_config, main
from paged_export.config import ExportConfig


class TestCLIPlan:
    """Tests for the plan command."""

    def test_a4_plan(self, capsys):
        result = main(["plan", "--width", "1000", "--height", "2500"])

        assert result == 0
        pages = json.loads(capsys.readouterr().out)["pages"]
        assert [(p["source_y_offset"], p["source_height"]) for p in pages] == [
            (0, 1415),
            (1415, 1085),
        ]

    def test_custom_geometry(self, capsys):
        result = main([
            "plan",
            "--width", "100",
            "--height", "250",
            "--page-width", "10",
            "--page-height", "10",
        ])

        assert result == 0
        pages = json.loads(capsys.readouterr().out)["pages"]
        assert [p["source_height"] for p in pages] == [100, 100, 50]

    def test_partial_custom_geometry(self, caplog):
        result = main(["plan", "--width", "100", "--height", "250", "--page-width", "10"])

        assert result == 1
        assert "Must specify both --page-width and --page-height" in caplog.text

    def test_zero_height(self, caplog):
        result = main(["plan", "--width", "1000", "--height", "0"])

        assert result == 1
        assert "Failed to plan slices" in caplog.text


class TestCLIExportImage:
    def test_exports_pdf(self, tmp_path, tall_png):
        output = tmp_path / "out.pdf"

        result = main(["export-image", "--image", str(tall_png), "--output", str(output)])

        assert result == 0
        doc = fitz.open(str(output))
        assert len(doc) == 2
        doc.close()

    def test_missing_image(self, tmp_path, caplog):
        result = main([
            "export-image",
            "--image", str(tmp_path / "missing.png"),
            "--output", str(tmp_path / "out.pdf"),
        ])

        assert result == 1
        assert "file not found" in caplog.text

    def test_manifest_flag(self, tmp_path, tall_png):
        output = tmp_path / "out.pdf"

        result = main([
            "export-image",
            "--image", str(tall_png),
            "--output", str(output),
            "--manifest",
        ])

        assert result == 0
        manifest = json.loads((tmp_path / "out.manifest.json").read_text())
        assert manifest["status"] == "complete"
        assert len(manifest["pages"]) == 2


class TestCLIExportQuote:
    def test_missing_document(self, tmp_path, caplog):
        result = main(["export-quote", "--document", str(tmp_path / "missing.json")])

        assert result == 1
        assert "Document not found" in caplog.text

    def test_invalid_document(self, tmp_path, caplog):
        document = tmp_path / "quote.json"
        document.write_text(json.dumps({"items": [{"unit_price": "1"}]}))

        result = main(["export-quote", "--document", str(document), "--output", str(tmp_path)])

        assert result == 1
        assert "Invalid quote document" in caplog.text

    @patch("paged_export.cli.DocumentExporter")
    def test_exports_quote(self, mock_exporter_class, tmp_path):
        mock_exporter = MagicMock()
        mock_exporter.export_quote.return_value = tmp_path / "quote-Q-1-2026-01-15.pdf"
        mock_exporter_class.return_value = mock_exporter

        document = tmp_path / "quote.json"
        document.write_text(json.dumps({"number": "Q-1"}))

        result = main([
            "export-quote",
            "--document", str(document),
            "--output", str(tmp_path),
            "--date", "2026-01-15",
            "--page-size", "letter",
        ])

        assert result == 0
        config = mock_exporter_class.call_args.args[0]
        assert config.page_size == "letter"
        quote, output_dir = mock_exporter.export_quote.call_args.args
        assert quote.number == "Q-1"
        assert output_dir == tmp_path


class TestCLIExportInvoice:
    @patch("paged_export.cli.DocumentExporter")
    def test_exports_invoice(self, mock_exporter_class, tmp_path):
        mock_exporter = MagicMock()
        mock_exporter.export_invoice.return_value = tmp_path / "Invoice-INV-1.pdf"
        mock_exporter_class.return_value = mock_exporter

        document = tmp_path / "invoice.json"
        document.write_text(json.dumps({"number": "INV-1", "amount_paid": "10"}))

        result = main(["export-invoice", "--document", str(document), "--output", str(tmp_path)])

        assert result == 0
        invoice, _ = mock_exporter.export_invoice.call_args.args
        assert invoice.number == "INV-1"

    @patch("paged_export.cli.DocumentExporter")
    def test_export_failure(self, mock_exporter_class, tmp_path, caplog):
        mock_exporter = MagicMock()
        mock_exporter.export_invoice.side_effect = OSError("disk full")
        mock_exporter_class.return_value = mock_exporter

        document = tmp_path / "invoice.json"
        document.write_text(json.dumps({"number": "INV-1"}))

        result = main(["export-invoice", "--document", str(document), "--output", str(tmp_path)])

        assert result == 1
        assert "Failed to export invoice: disk full" in caplog.text


class TestCLIExportFlyer:
    def test_exports_flyer(self, tmp_path, tall_png):
        result = main([
            "export-flyer",
            "--image", str(tall_png),
            "--output", str(tmp_path),
            "--recipient", "Jane Smith",
        ])

        assert result == 0
        assert (tmp_path / "FibreUS-Flyer-Jane-Smith.pdf").exists()


class TestCLIExportPages:
    def test_exports_page_images(self, tmp_path, tall_png):
        output = tmp_path / "pages"

        result = main(["export-pages", "--source", str(tall_png), "--output", str(output)])

        assert result == 0
        assert sorted(p.name for p in output.iterdir()) == ["tall-001.png", "tall-002.png"]

    def test_missing_source(self, tmp_path, caplog):
        result = main([
            "export-pages",
            "--source", str(tmp_path / "missing.pdf"),
            "--output", str(tmp_path),
        ])

        assert result == 1
        assert "Source file not found" in caplog.text


class TestCLIConfig:
    def test_config_file(self, tmp_path, tall_png):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"page_size": "letter", "company": {"name": "Acme"}}))

        result = main([
            "export-flyer",
            "--image", str(tall_png),
            "--output", str(tmp_path),
            "--config", str(config),
        ])

        assert result == 0
        assert (tmp_path / "Acme-Flyer-Client.pdf").exists()

    def test_flags_override_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"page_size": "letter", "company": {"name": "Acme"}}))
        args = argparse.Namespace(config=config, page_size="a4", scale=1.5, manifest=True)

        with patch.object(ExportConfig, "from_file", wraps=ExportConfig.from_file) as from_file:
            loaded = load_config(args)

        from_file.assert_called_once_with(config)
        assert loaded.page_size == "a4"
        assert loaded.scale == 1.5
        assert loaded.write_manifest is True
        assert loaded.company.name == "Acme"

    def test_defaults_without_config_file(self):
        args = argparse.Namespace(config=None, page_size=None, scale=None, manifest=False)

        assert load_config(args) == ExportConfig()


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "paged-export" in capsys.readouterr().out
