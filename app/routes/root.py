from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.core.config import Settings, get_app_settings

router = APIRouter()

_PAGE = """<!doctype html>
<html><head><meta charset="utf-8"/><title>Student Records</title>
<style>
body{font-family:system-ui,Arial;margin:20px;background:#f9fafb}
.card{max-width:980px;margin:auto;background:#fff;border:1px solid #ddd;border-radius:12px;padding:16px;margin-bottom:16px}
.btn{background:#2563eb;color:#fff;border:0;padding:6px 10px;border-radius:8px;cursor:pointer}
.btn.warn{background:#f59e0b}.btn.danger{background:#ef4444}.btn.grey{background:#6b7280}
table{width:100%;border-collapse:collapse}
th,td{text-align:left;padding:8px;border-bottom:1px solid #eee;font-size:14px}
input{padding:6px;border:1px solid #ccc;border-radius:6px;margin-right:6px}
label{font-weight:600}
small{color:#555}
.hidden{display:none}
#msg{min-height:20px;color:#b91c1c}
</style></head>
<body>
<div class="card">
  <h2>Students</h2>
  <div id="msg"></div>
  <form id="createForm" onsubmit="createStudent(event)">
    <input id="cName" placeholder="Name"/>
    <input id="cEmail" placeholder="Email"/>
    <input id="cAge" placeholder="Age" type="number" min="0"/>
    <button class="btn" type="submit">Add student</button>
  </form>
  <table style="margin-top:12px">
    <thead><tr><th>#</th><th>Name</th><th>Email</th><th>Age</th><th></th></tr></thead>
    <tbody id="rows"></tbody>
  </table>
  <div style="margin-top:8px">
    <button class="btn grey" onclick="goPage(-1)">Prev</button>
    <small id="pageInfo"></small>
    <button class="btn grey" onclick="goPage(1)">Next</button>
  </div>
</div>

<div class="card hidden" id="editCard">
  <h3>Edit student</h3>
  <form onsubmit="submitEdit(event)">
    <input id="eName" placeholder="Name"/>
    <input id="eEmail" placeholder="Email"/>
    <input id="eAge" placeholder="Age" type="number" min="0"/>
    <button class="btn" type="submit">Save</button>
    <button class="btn grey" type="button" onclick="hide('editCard')">Cancel</button>
  </form>
</div>

<div class="card hidden" id="marksCard">
  <h3>Marks: <span id="mStudent"></span></h3>
  <table>
    <thead><tr><th>Subject</th><th>Marks</th><th></th></tr></thead>
    <tbody id="marksRows"></tbody>
  </table>
  <form style="margin-top:8px" onsubmit="addMark(event)">
    <input id="mSubject" placeholder="Subject"/>
    <input id="mMarks" placeholder="Marks" type="number" min="0"/>
    <button class="btn" type="submit">Add subject</button>
    <button class="btn grey" type="button" onclick="hide('marksCard')">Close</button>
  </form>
</div>

<script>
  const API = "__API_PREFIX__";
  const LIMIT = 10;
  let page = 1, total = 0, editing = null, marksFor = null;

  function hide(id){ document.getElementById(id).classList.add('hidden'); }
  function show(id){ document.getElementById(id).classList.remove('hidden'); }
  function say(text){ document.getElementById('msg').textContent = text || ''; }
  function esc(s){ const d=document.createElement('div'); d.textContent=String(s); return d.innerHTML.replace(/"/g,'&quot;'); }

  async function call(method, path, body){
    const opts = { method, headers:{'Content-Type':'application/json'} };
    if(body !== undefined) opts.body = JSON.stringify(body);
    const resp = await fetch(API + path, opts);
    const out = await resp.json();
    if(!resp.ok){
      const details = (out.details || []).map(d => d.path + ': ' + d.message).join('; ');
      throw new Error((out.error || 'Request failed') + (details ? ' (' + details + ')' : ''));
    }
    return out;
  }

  function readStudent(prefix){
    const name = document.getElementById(prefix+'Name').value.trim();
    const email = document.getElementById(prefix+'Email').value.trim();
    const ageRaw = document.getElementById(prefix+'Age').value;
    if(!name) throw new Error('Name is required');
    if(!email) throw new Error('Email is required');
    const age = Number(ageRaw);
    if(ageRaw === '' || !Number.isInteger(age) || age < 0) throw new Error('Valid age is required');
    return { name, email, age };
  }

  async function loadStudents(){
    try{
      const out = await call('GET', '/students?page=' + page + '&limit=' + LIMIT);
      total = out.total;
      const rows = out.data.map((s, i) => '<tr>' +
        '<td>' + ((page-1)*LIMIT + i + 1) + '</td>' +
        '<td>' + esc(s.name) + '</td><td>' + esc(s.email) + '</td><td>' + esc(s.age) + '</td>' +
        '<td><button class="btn" onclick="viewMarks(\\'' + s._id + '\\')">Marks</button> ' +
        '<button class="btn warn" onclick="openEdit(\\'' + s._id + '\\')">Edit</button> ' +
        '<button class="btn danger" onclick="deleteStudent(\\'' + s._id + '\\')">Delete</button></td></tr>');
      document.getElementById('rows').innerHTML = rows.join('');
      const pages = Math.max(1, Math.ceil(total / LIMIT));
      document.getElementById('pageInfo').textContent = 'Page ' + page + ' of ' + pages + ' (' + total + ' students)';
    }catch(e){ say('Failed to fetch students: ' + e.message); }
  }

  function goPage(delta){
    const pages = Math.max(1, Math.ceil(total / LIMIT));
    const next = page + delta;
    if(next < 1 || next > pages) return;
    page = next;
    loadStudents();
  }

  async function createStudent(ev){
    ev.preventDefault();
    try{
      await call('POST', '/students', readStudent('c'));
      ['cName','cEmail','cAge'].forEach(id => document.getElementById(id).value = '');
      say('');
      loadStudents();
    }catch(e){ say(e.message); }
  }

  async function openEdit(id){
    try{
      const out = await call('GET', '/students/' + id);
      editing = id;
      document.getElementById('eName').value = out.student.name;
      document.getElementById('eEmail').value = out.student.email;
      document.getElementById('eAge').value = out.student.age;
      show('editCard');
    }catch(e){ say(e.message); }
  }

  async function submitEdit(ev){
    ev.preventDefault();
    try{
      await call('PUT', '/students/' + editing, readStudent('e'));
      hide('editCard');
      say('');
      loadStudents();
    }catch(e){ say(e.message); }
  }

  async function deleteStudent(id){
    if(!confirm('Delete student? This will remove the student and all their marks.')) return;
    try{
      await call('DELETE', '/students/' + id);
      if(marksFor === id) hide('marksCard');
      loadStudents();
    }catch(e){ say(e.message); }
  }

  function renderMarks(subjects){
    document.getElementById('marksRows').innerHTML = subjects.map(s => '<tr>' +
      '<td>' + esc(s.subject) + '</td><td>' + esc(s.marks) + '</td>' +
      '<td><button class="btn danger" data-subject="' + esc(s.subject) + '" onclick="deleteSubject(this.dataset.subject)">Delete</button></td></tr>').join('')
      || '<tr><td colspan="3"><small>No marks yet</small></td></tr>';
  }

  async function viewMarks(id){
    try{
      const out = await call('GET', '/students/' + id);
      marksFor = id;
      document.getElementById('mStudent').textContent = out.student.name;
      renderMarks(out.marks);
      show('marksCard');
    }catch(e){ say('Failed to fetch marks: ' + e.message); }
  }

  async function addMark(ev){
    ev.preventDefault();
    const subject = document.getElementById('mSubject').value.trim();
    const raw = document.getElementById('mMarks').value;
    const marks = Number(raw);
    if(!subject){ say('Subject is required'); return; }
    if(raw === '' || !Number.isInteger(marks) || marks < 0){ say('Marks must be a non-negative integer'); return; }
    try{
      const out = await call('POST', '/marks', { studentId: marksFor, subject, marks });
      document.getElementById('mSubject').value = '';
      document.getElementById('mMarks').value = '';
      renderMarks(out.subjects);
      say('');
    }catch(e){ say(e.message); }
  }

  async function deleteSubject(subject){
    if(!confirm('Delete all "' + subject + '" entries?')) return;
    try{
      const out = await call('DELETE', '/marks/student/' + marksFor + '/subject', { subject });
      renderMarks(out.subjects);
    }catch(e){ say(e.message); }
  }

  loadStudents();
</script>
</body></html>"""


@router.get("/", response_class=HTMLResponse)
def index(settings: Settings = Depends(get_app_settings)) -> HTMLResponse:
    return HTMLResponse(_PAGE.replace("__API_PREFIX__", settings.API_PREFIX))


@router.get("/health")
def health():
    return {"status": "ok"}
