"""
Sales Dashboard — Executive Performance Analytics

Analytics backend for turning the commercial report export (a CSV with
embedded executive section headers) into per-executive monthly and weekly
metrics and composite KPIs.

Pipeline:
    rows = loaders.read_report_rows(path)
    operations = loaders.extract_operations(rows)
    monthly = transforms.aggregate_monthly(operations)
    overview = dashboard.get_sales_overview(operations, executive, month)

To connect to Streamlit/Dash:
    Keep an OperationStore per session, call store.load_file(upload) and
    render dashboard.get_sales_overview(store.operations, ...) as cards and
    dashboard.get_chart_series(...) as charts.

To adapt to a changed export layout:
    Pass a config.ReportLayout with the new column offsets to the loaders.
"""
