"""Unit tests for the batch reporter."""

from csv_indexer.reporting import print_documents
from csv_indexer.schema.models import Document, DocumentBatch, FieldDefinition

FIELDS = (FieldDefinition(name="id"), FieldDefinition(name="name"))
BATCH = DocumentBatch(
    source="file.csv",
    documents=(
        Document(fields={"id": "1", "name": "Alice", "source_csv": "file.csv"}),
        Document(fields={"id": "2", "source_csv": "file.csv"}),
        Document(fields={"id": "3", "name": "Cy", "source_csv": "file.csv"}),
    ),
)


def test_full_dump(capsys) -> None:
    print_documents(BATCH, FIELDS, print_all=True)
    out = capsys.readouterr().out

    assert out.startswith("Test Mode - Printing all processed records:\n")
    assert "Record 1:\n  id: 1\n  name: Alice\n  source_csv: file.csv\n\n" in out
    # Unset fields are not printed.
    assert "Record 2:\n  id: 2\n  source_csv: file.csv\n\n" in out
    assert out.index("Record 1:") < out.index("Record 2:") < out.index("Record 3:")
    assert out.endswith("Total records processed: 3\n")


def test_sample_shows_first_two(capsys) -> None:
    print_documents(BATCH, FIELDS, print_all=False)
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "Sample of processed records:"
    assert lines[1] == "Fields: {'id': '1', 'name': 'Alice', 'source_csv': 'file.csv'}"
    assert lines[2] == "Fields: {'id': '2', 'source_csv': 'file.csv'}"
    assert lines[3] == "Total records processed: 3"
    assert len(lines) == 4


def test_empty_batch(capsys) -> None:
    print_documents(DocumentBatch(source="empty.csv"), FIELDS, print_all=False)
    assert capsys.readouterr().out == (
        "Sample of processed records:\nTotal records processed: 0\n"
    )


def test_custom_stream_and_no_mutation(tmp_path) -> None:
    before = [dict(doc.fields) for doc in BATCH]
    out_path = tmp_path / "report.txt"
    with open(out_path, "w") as fh:
        print_documents(BATCH, FIELDS, print_all=True, stream=fh)
    assert "Total records processed: 3" in out_path.read_text()
    assert [dict(doc.fields) for doc in BATCH] == before
