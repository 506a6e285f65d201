"""Message catalogs, keyed by language code."""

ENGLISH = {
    "error": "Error",
    # add
    "add.success": "Time entry saved",
    "add.success_merged": "Time entry merged with an existing entry for the same work",
    "add.output.date": "Date: {value}",
    "add.output.consultant": "Consultant: {value}",
    "add.output.hours": "Hours: {value:.2f}",
    "add.output.rate": "Rate: {value:.2f}",
    "add.output.cost": "Cost: {value:.2f}",
    "add.output.project": "Project: {value}",
    "add.output.customer": "Customer: {value}",
    "add.output.description": "Description: {value}",
    # get / table
    "get.no_results": "No time entries found",
    "table.title": "Time entries ({count})",
    "header.date": "Date",
    "header.consultant": "Consultant",
    "header.hours": "Hours",
    "header.rate": "Rate",
    "header.cost": "Cost",
    "header.project": "Project",
    "header.customer": "Customer",
    "header.description": "Description",
    "total.hours": "Total hours",
    "total.cost": "Total cost",
    "breakdown.consultant": "Per consultant",
    "breakdown.project": "Per project",
    "breakdown.customer": "Per customer",
    # export
    "export.success": "Exported {count} entries to {path}",
    # report
    "report.title": "Time report - {month}",
    "report.summary": "Summary",
    "report.no_entries": "No time entries found for {month}",
    # config
    "config.title": "Current configuration",
    "config.no_defaults": "No defaults are set.",
    "config.set_instruction": "Set defaults with: worklog config set --consultant NAME --client NAME --project NAME --rate N",
    "config.saved": "Configuration saved",
    "config.cleared": "Configuration cleared",
    "config.default_consultant": "Default consultant: {value}",
    "config.default_client": "Default client: {value}",
    "config.default_project": "Default project: {value}",
    "config.default_rate": "Default rate: {value}",
    "config.language": "Language: {value}",
    "config.database_title": "Database",
    "config.database_url": "URL: {value}",
    "config.database_host": "Host: {value}",
    "config.database_port": "Port: {value}",
    "config.database_user": "User: {value}",
    "config.database_name": "Name: {value}",
    "config.must_specify": "Specify at least one value to set",
    "config.key_not_found": "Configuration key '{key}' not found",
    # errors
    "error.invalid_date": "Invalid date format '{value}', use YYYY-MM-DD",
    "error.invalid_month": "Invalid month format '{value}', use YYYY-MM",
    "error.year_range": "Year must be between 1 and 9998",
    "error.week_range": "Week must be between 1 and 53",
    "error.month_range": "Month must be between 1 and 12",
    "error.consultant_required": "Consultant is required (use --consultant or set a default)",
    "error.customer_required": "Customer is required (use --client or set a default)",
    "error.project_required": "Project is required (use --project or set a default)",
    "error.rate_required": "Hourly rate must be greater than 0 (use --rate or set a default)",
    "error.rate_positive": "Hourly rate must be greater than 0",
    "error.hours_positive": "Hours must be greater than 0",
    "error.description_required": "Description is required",
    "error.store": "Store operation failed: {operation}",
    "error.render_write": "Failed to write {format} output: {cause}",
    "error.render_create": "Could not create output file {path}: {cause}",
    "error.config_read": "Could not read config file {path}: {cause}",
    "error.config_not_mapping": "Config file {path} must contain a mapping",
    "error.config_invalid": "Invalid configuration: {detail}",
    "error.config_port": "Invalid database port: {port}",
    "error.config_write": "Could not write {path}: {cause}",
    # store operations
    "store.connect": "connect to database",
    "store.get_or_create_consultant": "get or create consultant",
    "store.get_or_create_customer": "get or create customer",
    "store.get_or_create_project": "get or create project",
    "store.list_consultants": "list consultants",
    "store.list_customers": "list customers",
    "store.list_projects": "list projects",
    "store.save_entry": "save time entry",
    "store.load_entry": "load time entry",
    "store.fetch_entries": "fetch time entries",
    "store.count_entries": "count time entries",
    # months
    "month.1": "January",
    "month.2": "February",
    "month.3": "March",
    "month.4": "April",
    "month.5": "May",
    "month.6": "June",
    "month.7": "July",
    "month.8": "August",
    "month.9": "September",
    "month.10": "October",
    "month.11": "November",
    "month.12": "December",
}

SWEDISH = {
    "error": "Fel",
    # add
    "add.success": "Tidrapport sparad",
    "add.success_merged": "Tidrapporten slogs ihop med en befintlig post för samma arbete",
    "add.output.date": "Datum: {value}",
    "add.output.consultant": "Konsult: {value}",
    "add.output.hours": "Timmar: {value:.2f}",
    "add.output.rate": "Timpris: {value:.2f}",
    "add.output.cost": "Kostnad: {value:.2f}",
    "add.output.project": "Projekt: {value}",
    "add.output.customer": "Kund: {value}",
    "add.output.description": "Beskrivning: {value}",
    # get / table
    "get.no_results": "Inga tidrapporter hittades",
    "table.title": "Tidrapporter ({count})",
    "header.date": "Datum",
    "header.consultant": "Konsult",
    "header.hours": "Timmar",
    "header.rate": "Timpris",
    "header.cost": "Kostnad",
    "header.project": "Projekt",
    "header.customer": "Kund",
    "header.description": "Beskrivning",
    "total.hours": "Totalt antal timmar",
    "total.cost": "Total kostnad",
    "breakdown.consultant": "Per konsult",
    "breakdown.project": "Per projekt",
    "breakdown.customer": "Per kund",
    # export
    "export.success": "Exporterade {count} poster till {path}",
    # report
    "report.title": "Tidrapport - {month}",
    "report.summary": "Sammanfattning",
    "report.no_entries": "Inga tidrapporter hittades för {month}",
    # config
    "config.title": "Nuvarande konfiguration",
    "config.no_defaults": "Inga standardvärden är satta.",
    "config.set_instruction": "Sätt standardvärden med: worklog config set --consultant NAMN --client NAMN --project NAMN --rate N",
    "config.saved": "Konfigurationen sparad",
    "config.cleared": "Konfigurationen rensad",
    "config.default_consultant": "Standardkonsult: {value}",
    "config.default_client": "Standardkund: {value}",
    "config.default_project": "Standardprojekt: {value}",
    "config.default_rate": "Standardtimpris: {value}",
    "config.language": "Språk: {value}",
    "config.database_title": "Databas",
    "config.database_url": "URL: {value}",
    "config.database_host": "Värd: {value}",
    "config.database_port": "Port: {value}",
    "config.database_user": "Användare: {value}",
    "config.database_name": "Namn: {value}",
    "config.must_specify": "Ange minst ett värde att spara",
    "config.key_not_found": "Konfigurationsnyckeln '{key}' hittades inte",
    # errors
    "error.invalid_date": "Ogiltigt datumformat '{value}', använd ÅÅÅÅ-MM-DD",
    "error.invalid_month": "Ogiltigt månadsformat '{value}', använd ÅÅÅÅ-MM",
    "error.year_range": "Året måste vara mellan 1 och 9998",
    "error.week_range": "Veckan måste vara mellan 1 och 53",
    "error.month_range": "Månaden måste vara mellan 1 och 12",
    "error.consultant_required": "Konsult krävs (använd --consultant eller sätt ett standardvärde)",
    "error.customer_required": "Kund krävs (använd --client eller sätt ett standardvärde)",
    "error.project_required": "Projekt krävs (använd --project eller sätt ett standardvärde)",
    "error.rate_required": "Timpriset måste vara större än 0 (använd --rate eller sätt ett standardvärde)",
    "error.rate_positive": "Timpriset måste vara större än 0",
    "error.hours_positive": "Timmar måste vara större än 0",
    "error.description_required": "Beskrivning krävs",
    "error.store": "Databasåtgärden misslyckades: {operation}",
    "error.render_write": "Kunde inte skriva {format}-utdata: {cause}",
    "error.render_create": "Kunde inte skapa utdatafilen {path}: {cause}",
    "error.config_read": "Kunde inte läsa konfigurationsfilen {path}: {cause}",
    "error.config_not_mapping": "Konfigurationsfilen {path} måste innehålla en mappning",
    "error.config_invalid": "Ogiltig konfiguration: {detail}",
    "error.config_port": "Ogiltig databasport: {port}",
    "error.config_write": "Kunde inte skriva {path}: {cause}",
    # store operations
    "store.connect": "ansluta till databasen",
    "store.get_or_create_consultant": "hämta eller skapa konsult",
    "store.get_or_create_customer": "hämta eller skapa kund",
    "store.get_or_create_project": "hämta eller skapa projekt",
    "store.list_consultants": "lista konsulter",
    "store.list_customers": "lista kunder",
    "store.list_projects": "lista projekt",
    "store.save_entry": "spara tidrapport",
    "store.load_entry": "läsa tidrapport",
    "store.fetch_entries": "hämta tidrapporter",
    "store.count_entries": "räkna tidrapporter",
    # months
    "month.1": "januari",
    "month.2": "februari",
    "month.3": "mars",
    "month.4": "april",
    "month.5": "maj",
    "month.6": "juni",
    "month.7": "juli",
    "month.8": "augusti",
    "month.9": "september",
    "month.10": "oktober",
    "month.11": "november",
    "month.12": "december",
}

CATALOGS = {
    "en": ENGLISH,
    "sv": SWEDISH,
}
