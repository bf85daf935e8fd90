# nexuscal/render/inline_js.py
from __future__ import annotations

JS_BLOCK = r'''(function () {
  "use strict";
  const DATA = JSON.parse(document.getElementById("nx-data").textContent || "{}");
  const byId = {};
  (DATA.appointments || []).forEach(function (a) { byId[a.id] = a; });

  document.querySelectorAll("[data-filter-type]").forEach(function (box) {
    box.addEventListener("change", function () {
      const typ = box.getAttribute("data-filter-type");
      document.querySelectorAll('[data-type="' + typ + '"]').forEach(function (el) {
        el.classList.toggle("hidden-type", !box.checked);
      });
    });
  });

  document.addEventListener("click", function (ev) {
    const edit = ev.target.closest("[data-edit]");
    if (edit) {
      ev.stopPropagation();
      const a = byId[edit.getAttribute("data-edit")];
      if (a) { console.info("[nexuscal] edit", a); }
      return;
    }
    const create = ev.target.closest("[data-create-date]");
    if (create) {
      console.info("[nexuscal] create", create.getAttribute("data-create-date"), create.getAttribute("data-create-time") || "09:00");
    }
  });
})();'''
