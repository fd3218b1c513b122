# Общие хелперы JSON API: ответы, схемы, обработчики ошибок.
# Маршрутов здесь нет, блюпринты сущностей лежат рядом (timetable, homework, duty).
