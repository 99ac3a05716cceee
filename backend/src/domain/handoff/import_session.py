"""Import session descriptor builder.

Generates the XML import-session document the imaging backend (Kofax) reads
to create one batch per email attachment. Pure: no I/O, no clock.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from .models import WorkItem

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
DEFAULT_BATCH_CLASS_NAME = "DPS_EMAIL"
DEFAULT_FORM_TYPE_NAME = "DPS_EMAIL_ATTACHMENT"


def _field(parent: ET.Element, tag: str, name: str, value: str) -> None:
    ET.SubElement(parent, tag, {"Name": name, "Value": value})


def generate_import_session_xml(
    item: WorkItem,
    batch_class_name: str = DEFAULT_BATCH_CLASS_NAME,
    form_type_name: str = DEFAULT_FORM_TYPE_NAME,
    import_folder: Optional[str] = None,
) -> str:
    """Describe a work item as a Kofax import session.

    Args:
        item: Inbound work item
        batch_class_name: Kofax batch class receiving the batch
        form_type_name: Form type assigned to the single document
        import_folder: Remote folder holding the uploaded attachment; when
            omitted the page refers to the bare file name

    Returns:
        str: XML document including the declaration
    """
    session = ET.Element("ImportSession", {"UserID": "", "Password": ""})
    batches = ET.SubElement(session, "Batches")
    batch = ET.SubElement(
        batches,
        "Batch",
        {
            "BatchClassName": batch_class_name,
            "Name": str(item.transaction_id),
            "Description": item.file_info.name,
            "Priority": "5",
            "EnableAutomaticSeparationAndFormID": "0",
        },
    )

    batch_fields = ET.SubElement(batch, "BatchFields")
    _field(batch_fields, "BatchField", "TransactionId", str(item.transaction_id))
    _field(batch_fields, "BatchField", "CorrelationId", item.correlation_id)
    _field(batch_fields, "BatchField", "EmailId", item.mailbox_id_base64)
    _field(batch_fields, "BatchField", "FileId", item.file_info.id)

    documents = ET.SubElement(batch, "Documents")
    document = ET.SubElement(documents, "Document", {"FormTypeName": form_type_name})
    index_fields = ET.SubElement(document, "IndexFields")
    _field(index_fields, "IndexField", "OriginalFileName", item.file_info.name)

    pages = ET.SubElement(document, "Pages")
    if import_folder:
        import_file_name = f"{import_folder.rstrip('/')}/{item.file_info.name}"
    else:
        import_file_name = item.file_info.name
    ET.SubElement(pages, "Page", {"ImportFileName": import_file_name})

    return XML_DECLARATION + ET.tostring(session, encoding="unicode")
