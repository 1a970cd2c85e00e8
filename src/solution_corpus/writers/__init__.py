"""Row writers (the output sink).

One writer per run, chosen by OutputFormat:
- parquet: typed columns, tags as list<string>
- csv: header + one record per row, tags joined with "; "
- json: one JSON object per line, tags as a JSON array
"""
