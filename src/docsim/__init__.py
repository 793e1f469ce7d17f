"""Document text extraction and near-duplicate scoring.

Extraction handlers turn files into plain text; the similarity engine
scores a candidate text against a reference corpus and reports the
references that clear a threshold.
"""
