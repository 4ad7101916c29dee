from goalflow.services.file_manager import (
    JOBS_CSV,
    JOBS_HEADER,
    SCRAPED_CSV,
    SCRAPED_HEADER,
    FileManager,
)


def test_render_csv_quotes_every_value():
    content = FileManager.render_csv(JOBS_HEADER, [("ML Engineer", "Acme, Inc", "Remote", "https://x/1")])
    assert content == 'Title,Company,Location,Link\n"ML Engineer","Acme, Inc","Remote","https://x/1"'


def test_embedded_quotes_are_not_escaped():
    assert FileManager.render_csv(SCRAPED_HEADER, [('say "hi"',)]) == 'Result\n"say "hi""'


def test_write_csv(tmp_path):
    ref = FileManager.write_csv(SCRAPED_CSV, SCRAPED_HEADER, [("First",), ("Second",)], base_dir=tmp_path)

    assert ref.written
    assert ref.rows == 2
    assert ref.path == str(tmp_path / SCRAPED_CSV)
    assert (tmp_path / SCRAPED_CSV).read_text(encoding="utf-8") == 'Result\n"First"\n"Second"'


def test_placeholder_does_not_touch_disk(tmp_path):
    ref = FileManager.placeholder_csv(JOBS_CSV, JOBS_HEADER, base_dir=tmp_path)

    assert not ref.written
    assert ref.rows == 0
    assert ref.preview == "Title,Company,Location,Link"
    assert not (tmp_path / JOBS_CSV).exists()
