"""Interface-level constants for the board navigator TUI."""

ADDRESS_HISTORY_LIMIT = 100
STATUS_TTL = 4.0
ERROR_TTL = 8.0

LANG_PACK = {
    "en": {
        "COLUMN_COLLECTIONS": "Lists",
        "COLUMN_ITEMS": "Tasks",
        "COLUMN_SUB_ITEMS": "Subtasks",
        "COLUMN_LOADING": "Loading…",
        "COLUMN_ERROR": "Could not load: {error}",
        "COLUMN_RETRY_HINT": "Select the task again to retry",
        "EMPTY_COLLECTIONS": "No lists on this board",
        "EMPTY_ITEMS": "No tasks in this list",
        "EMPTY_SUB_ITEMS": "No subtasks",
        "ITEM_COUNT": "{count} tasks",
        "MORE_LABELS": "+{count}",
        "DUE_TODAY": "Today",
        "DUE_TOMORROW": "Tomorrow",
        "DUE_OVERDUE": "{days} days overdue",
        "DUE_DATE": "{day:02d}.{month:02d}.{year}",
        "WEEKDAY_0": "Monday",
        "WEEKDAY_1": "Tuesday",
        "WEEKDAY_2": "Wednesday",
        "WEEKDAY_3": "Thursday",
        "WEEKDAY_4": "Friday",
        "WEEKDAY_5": "Saturday",
        "WEEKDAY_6": "Sunday",
        "PRIORITY_HIGH": "High",
        "PRIORITY_MEDIUM": "Medium",
        "PRIORITY_LOW": "Low",
        "PREVIEW_EMPTY": "Hover or select an entry to preview it",
        "PREVIEW_KIND_COLLECTION": "List",
        "PREVIEW_KIND_ITEM": "Task",
        "PREVIEW_KIND_SUB_ITEM": "Subtask",
        "PREVIEW_IN": "in {name}",
        "PREVIEW_COMPLETED": "Completed",
        "PREVIEW_PRIORITY": "Priority",
        "PREVIEW_DUE": "Due",
        "PREVIEW_DESCRIPTION": "Description",
        "PREVIEW_LINK": "Link",
        "PREVIEW_LABELS": "Labels",
        "PREVIEW_PROGRESS": "Progress",
        "PREVIEW_TASKS": "Tasks",
        "PREVIEW_SUBTASKS": "Subtasks",
        "PREVIEW_NO_TASKS": "No tasks yet",
        "PREVIEW_NO_SUBTASKS": "No subtasks",
        "PREVIEW_CHILDREN_LOADING": "Loading subtasks…",
        "PREVIEW_CHILDREN_UNKNOWN": "Open the task to load its subtasks",
        "PREVIEW_MORE": "… {count} more",
        "STATUS_LOADING_BOARD": "Loading board {slug}…",
        "STATUS_BOARD_ERROR": "Board could not be loaded: {error}",
        "STATUS_FETCH_ERROR": "Subtasks could not be loaded: {error}",
        "STATUS_ACTION_ERROR": "Action failed: {error}",
        "STATUS_ACTION_UNSUPPORTED": "Not available: {error}",
        "STATUS_ACTION_DISABLED": "This column is read-only",
        "STATUS_TOGGLED": "Updated “{title}”",
        "STATUS_DELETED": "Deleted “{title}”",
        "STATUS_CONFIRM_DELETE": "Press d again to delete “{title}”",
        "STATUS_EDIT_OPENED": "Opened {link}",
        "STATUS_HISTORY_START": "No earlier address",
        "STATUS_HISTORY_END": "No later address",
        "STATUS_RELOADING": "Reloading…",
        "BREADCRUMB_BOARD": "Board",
        "FOOTER_HINTS": "↑↓ move · ←→ columns · Enter open · Space done · e edit · d delete · Bksp up · [ ] history · r reload · q quit",
        "FOOTER_HINTS_BROWSE": "↑↓ move · ←→ columns · Enter open · Bksp up · [ ] history · r reload · q quit",
    },
    "tr": {
        "COLUMN_COLLECTIONS": "Listeler",
        "COLUMN_ITEMS": "Görevler",
        "COLUMN_SUB_ITEMS": "Alt Görevler",
        "COLUMN_LOADING": "Yükleniyor…",
        "COLUMN_ERROR": "Yüklenemedi: {error}",
        "COLUMN_RETRY_HINT": "Tekrar denemek için görevi yeniden seçin",
        "EMPTY_COLLECTIONS": "Bu panoda liste yok",
        "EMPTY_ITEMS": "Bu listede görev yok",
        "EMPTY_SUB_ITEMS": "Alt görev yok",
        "ITEM_COUNT": "{count} görev",
        "DUE_TODAY": "Bugün",
        "DUE_TOMORROW": "Yarın",
        "DUE_OVERDUE": "{days} gün gecikti",
        "WEEKDAY_0": "Pazartesi",
        "WEEKDAY_1": "Salı",
        "WEEKDAY_2": "Çarşamba",
        "WEEKDAY_3": "Perşembe",
        "WEEKDAY_4": "Cuma",
        "WEEKDAY_5": "Cumartesi",
        "WEEKDAY_6": "Pazar",
        "PRIORITY_HIGH": "Yüksek",
        "PRIORITY_MEDIUM": "Orta",
        "PRIORITY_LOW": "Düşük",
        "PREVIEW_EMPTY": "Önizleme için bir öğenin üzerine gelin veya seçin",
        "PREVIEW_KIND_COLLECTION": "Liste",
        "PREVIEW_KIND_ITEM": "Görev",
        "PREVIEW_KIND_SUB_ITEM": "Alt görev",
        "PREVIEW_IN": "{name} içinde",
        "PREVIEW_COMPLETED": "Tamamlandı",
        "PREVIEW_PRIORITY": "Öncelik",
        "PREVIEW_DUE": "Bitiş",
        "PREVIEW_DESCRIPTION": "Açıklama",
        "PREVIEW_LINK": "Bağlantı",
        "PREVIEW_LABELS": "Etiketler",
        "PREVIEW_PROGRESS": "İlerleme",
        "PREVIEW_TASKS": "Görevler",
        "PREVIEW_SUBTASKS": "Alt Görevler",
        "PREVIEW_NO_TASKS": "Henüz görev yok",
        "PREVIEW_NO_SUBTASKS": "Alt görev yok",
        "PREVIEW_CHILDREN_LOADING": "Alt görevler yükleniyor…",
        "PREVIEW_CHILDREN_UNKNOWN": "Alt görevleri görmek için görevi açın",
        "PREVIEW_MORE": "… {count} tane daha",
        "STATUS_LOADING_BOARD": "{slug} panosu yükleniyor…",
        "STATUS_BOARD_ERROR": "Pano yüklenemedi: {error}",
        "STATUS_FETCH_ERROR": "Alt görevler yüklenemedi: {error}",
        "STATUS_ACTION_ERROR": "İşlem başarısız: {error}",
        "STATUS_ACTION_UNSUPPORTED": "Kullanılamıyor: {error}",
        "STATUS_ACTION_DISABLED": "Bu sütun salt okunur",
        "STATUS_TOGGLED": "“{title}” güncellendi",
        "STATUS_DELETED": "“{title}” silindi",
        "STATUS_CONFIRM_DELETE": "“{title}” silmek için tekrar d tuşuna basın",
        "STATUS_EDIT_OPENED": "{link} açıldı",
        "STATUS_HISTORY_START": "Daha eski adres yok",
        "STATUS_HISTORY_END": "Daha yeni adres yok",
        "STATUS_RELOADING": "Yeniden yükleniyor…",
        "BREADCRUMB_BOARD": "Pano",
        "FOOTER_HINTS": "↑↓ gez · ←→ sütun · Enter aç · Boşluk tamamla · e düzenle · d sil · Bksp yukarı · [ ] geçmiş · r yenile · q çık",
        "FOOTER_HINTS_BROWSE": "↑↓ gez · ←→ sütun · Enter aç · Bksp yukarı · [ ] geçmiş · r yenile · q çık",
    },
}
