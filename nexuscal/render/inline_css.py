# nexuscal/render/inline_css.py
from __future__ import annotations

CSS_BLOCK = r'''  :root {
    --bg: #f8fafc;
    --surface: #ffffff;
    --line: #e2e8f0;
    --text: #0f172a;
    --muted: #64748b;
    --accent: #2563eb;
    --blue: #3b82f6;
    --green: #22c55e;
    --purple: #a855f7;
    --gray: #94a3b8;
  }
  * { box-sizing: border-box; }
  body {
    margin: 0;
    font: 14px/1.4 system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
    color: var(--text);
    background: var(--bg);
  }

  header {
    display: flex;
    align-items: center;
    justify-content: space-between;
    gap: 12px;
    padding: 10px 16px;
    background: var(--surface);
    border-bottom: 1px solid var(--line);
  }
  header .nav { display: flex; align-items: center; gap: 6px; }
  header .title { font-size: 20px; font-weight: 500; min-width: 180px; }
  header .modes { display: flex; gap: 2px; background: var(--bg); border-radius: 8px; padding: 2px; }
  header .modes button.active { background: var(--surface); color: var(--accent); font-weight: 600; }
  button {
    border: 1px solid transparent;
    background: transparent;
    border-radius: 6px;
    padding: 4px 10px;
    cursor: pointer;
    font: inherit;
  }
  button.outline { border-color: var(--line); }

  .layout { display: grid; grid-template-columns: 256px 1fr; min-height: calc(100vh - 56px); }
  aside { padding: 16px; border-right: 1px solid var(--line); background: var(--surface); }
  aside .create {
    display: block;
    width: 100%;
    padding: 10px;
    border-radius: 16px;
    box-shadow: 0 1px 3px rgba(0,0,0,0.12);
    margin-bottom: 16px;
  }
  aside h4 { margin: 16px 0 6px; font-size: 12px; text-transform: uppercase; color: var(--muted); }

  .mini .mini-title { font-weight: 600; margin-bottom: 6px; }
  .mini .mini-grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 2px; text-align: center; }
  .mini .mini-head { font-size: 10px; color: var(--muted); }
  .mini .mini-day { font-size: 11px; padding: 3px 0; border-radius: 50%; }
  .mini .mini-day.today { background: var(--accent); color: #fff; font-weight: 600; }

  .filters label { display: flex; align-items: center; gap: 8px; padding: 3px 0; }
  .filters input:disabled + .dot { opacity: .35; }
  .upcoming li { list-style: none; padding: 4px 0; border-bottom: 1px solid var(--line); }
  .upcoming ul { margin: 0; padding: 0; }
  .upcoming .when { color: var(--muted); font-size: 11px; }

  main { overflow: auto; background: var(--surface); }

  .month { display: grid; grid-template-columns: repeat(7, 1fr); }
  .month .wd { padding: 6px; font-size: 11px; color: var(--muted); text-align: center; border-bottom: 1px solid var(--line); }
  .month .cell { min-height: 110px; padding: 4px; border-right: 1px solid var(--line); border-bottom: 1px solid var(--line); cursor: pointer; }
  .month .cell.pad { background: var(--bg); cursor: default; }
  .month .cell .num { display: inline-block; width: 24px; height: 24px; line-height: 24px; text-align: center; border-radius: 50%; font-size: 12px; }
  .month .cell.today .num { background: var(--accent); color: #fff; font-weight: 600; }
  .month .item { font-size: 11px; padding: 1px 4px; margin-top: 2px; border-radius: 4px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }

  .tg { display: grid; grid-template-columns: 60px 1fr; }
  .tg .hours { position: relative; }
  .tg .hour { position: absolute; right: 6px; font-size: 10px; color: var(--muted); transform: translateY(-50%); }
  .tg .cols { display: grid; grid-template-columns: repeat(var(--cols), 1fr); }
  .tg .col-head { text-align: center; padding: 6px 0; border-bottom: 1px solid var(--line); }
  .tg .col-head .wd { font-size: 11px; color: var(--muted); }
  .tg .col-head .num { font-size: 22px; }
  .tg .col-head.today .num { color: var(--accent); font-weight: 600; }
  .tg .col { position: relative; border-left: 1px solid var(--line); }
  .tg .slot { position: absolute; left: 0; right: 0; border-top: 1px solid var(--line); cursor: pointer; }
  .tg .block {
    position: absolute;
    padding: 2px 6px;
    border-radius: 4px;
    border-left: 3px solid rgba(0,0,0,0.2);
    overflow: hidden;
    font-size: 11px;
    cursor: pointer;
    z-index: 2;
  }
  .tg .block .t { font-weight: 600; }

  .agenda { max-width: 820px; margin: 0 auto; padding: 16px; }
  .agenda .empty { padding: 48px; text-align: center; color: var(--muted); }
  .agenda .day { display: flex; gap: 24px; padding: 12px 0; border-bottom: 1px solid var(--line); }
  .agenda .day .date { width: 72px; text-align: center; }
  .agenda .day .date .num { font-size: 24px; }
  .agenda .entry { display: flex; gap: 12px; padding: 6px; border-radius: 6px; cursor: pointer; }
  .agenda .entry .dot { width: 10px; height: 10px; border-radius: 50%; margin-top: 5px; }

  .c-blue { background: #dbeafe; color: #1e40af; }
  .c-green { background: #dcfce7; color: #166534; }
  .c-purple { background: #f3e8ff; color: #6b21a8; }
  .c-gray { background: #f1f5f9; color: #334155; }
  .dot.c-blue { background: var(--blue); }
  .dot.c-green { background: var(--green); }
  .dot.c-purple { background: var(--purple); }
  .dot.c-gray { background: var(--gray); }
  .hidden-type { display: none !important; }'''
